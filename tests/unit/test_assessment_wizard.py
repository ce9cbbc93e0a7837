"""
Unit tests for the assessment wizard state machine.

Repositories are mocked; see tests/integration/test_assessment_flow.py for the
end-to-end run against the fake backend.
Run: pytest tests/unit/test_assessment_wizard.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from unittest.mock import MagicMock

import pytest
from models.assessment import Assessment, AssessmentResult, NumericAnswer, TextAnswer
from models.plan import Plan, Report
from models.question import Pillar, Question, QuestionType
from models.role import Role
from repositories.assessment_repository import AssessmentRepository
from services.assessment_wizard import (
    AssessmentWizard,
    Completed,
    Failed,
    InProgress,
    NotStarted,
    Submitting,
)
from utils.errors import HttpStatusError, InvalidTransition, NetworkError, ValidationError

ROLE = Role(id=1, name="Backend Engineer", category="ENGINEERING")
QUESTIONS = [
    Question(id=11, text="Q1", type=QuestionType.LIKERT, pillar=Pillar.TECH, options=list("12345")),
    Question(id=12, text="Q2", type=QuestionType.TEXT, pillar=Pillar.PORTFOLIO, required=False),
    Question(id=13, text="Q3", type=QuestionType.MULTIPLE, pillar=Pillar.AI, options=["A", "B", "C"]),
]
RESULT = AssessmentResult.model_validate({"assessmentId": 100, "scores": {"overall": 72.4}})


@pytest.fixture()
def repos():
    catalog = MagicMock()
    catalog.list_roles.return_value = [ROLE]
    catalog.get_role_questions.return_value = list(QUESTIONS)

    assessments = MagicMock()
    assessments.create.return_value = Assessment(id=100, role_id=1)
    assessments.complete.return_value = RESULT
    assessments.get_results.return_value = RESULT

    plans = MagicMock()
    plans.generate.return_value = Plan(id=1, assessment_id=100, summary="Plan")

    reports = MagicMock()
    reports.request.return_value = Report(report_id="r-1", download_url="http://x/r-1.pdf")
    reports.download_url.side_effect = lambda report: report.download_url

    return catalog, assessments, plans, reports


@pytest.fixture()
def wizard(repos):
    catalog, assessments, plans, reports = repos
    return AssessmentWizard(catalog, assessments, plans, reports, user_id="u-1")


@pytest.fixture()
def started(wizard):
    wizard.load_roles()
    wizard.start(1, consent=True)
    return wizard


def answer_all(wizard):
    wizard.answer(11, 4)
    wizard.next()
    wizard.next()  # optional text question
    wizard.answer(13, 2)


# ---------------------------------------------------------------------------
# NotStarted
# ---------------------------------------------------------------------------

class TestStart:

    def test_initial_state(self, wizard):
        assert isinstance(wizard.state, NotStarted)
        assert wizard.phase == "NotStarted"

    def test_load_roles(self, wizard):
        state = wizard.load_roles()
        assert state.roles == (ROLE,)

    def test_start_requires_listed_role_and_consent(self, wizard, repos):
        wizard.load_roles()
        with pytest.raises(ValidationError) as exc:
            wizard.start(99, consent=False)
        assert set(exc.value.errors) == {"role", "consent"}
        repos[1].create.assert_not_called()

    def test_start_creates_assessment(self, wizard, repos):
        wizard.load_roles()
        state = wizard.start("1", consent=True, email="a@b.c")

        assert isinstance(state, InProgress)
        assert state.index == 0
        assert state.questions == tuple(QUESTIONS)
        repos[1].create.assert_called_once_with(user_id="u-1", role_id=1, consent=True, email="a@b.c")

    def test_start_failure_can_be_retried(self, wizard, repos):
        wizard.load_roles()
        repos[1].create.side_effect = NetworkError("Could not reach the server")

        state = wizard.start(1, consent=True)
        assert isinstance(state, Failed)
        assert "Could not reach" in state.message

        repos[1].create.side_effect = None
        assert isinstance(wizard.retry(), NotStarted)
        assert isinstance(wizard.start(1, consent=True), InProgress)

    def test_open_results(self, wizard):
        state = wizard.open_results(100)
        assert isinstance(state, Completed)
        assert state.assessment_id == 100


# ---------------------------------------------------------------------------
# InProgress
# ---------------------------------------------------------------------------

class TestAnswering:

    def test_required_question_blocks_next(self, started):
        with pytest.raises(InvalidTransition):
            started.next()
        assert started.state.index == 0

    def test_optional_question_can_be_skipped(self, started):
        started.answer(11, 3)
        started.next()
        assert started.state.current_question.id == 12
        started.next()
        assert started.state.current_question.id == 13

    def test_answer_overwrites(self, started):
        started.answer(11, 2)
        started.answer(11, 5)
        assert started.state.answers[11] == NumericAnswer(question_id=11, value_numeric=5)

    def test_answer_variant_follows_type(self, started):
        started.answer(11, "4")
        started.answer(12, "github.com/me")
        assert isinstance(started.state.answers[11], NumericAnswer)
        assert started.state.answers[11].value_numeric == 4
        assert isinstance(started.state.answers[12], TextAnswer)

    def test_blank_text_clears_answer(self, started):
        started.answer(12, "something")
        started.answer(12, "   ")
        assert 12 not in started.state.answers

    def test_unknown_question(self, started):
        with pytest.raises(ValueError):
            started.answer(999, 1)

    def test_previous_is_never_blocked(self, started):
        started.answer(11, 3)
        started.next()
        started.previous()
        started.previous()
        assert started.state.index == 0

    def test_progress(self, started):
        assert started.state.progress == pytest.approx(100 / 3)

    def test_next_stays_on_last_question(self, started):
        answer_all(started)
        started.next()
        assert started.state.is_last

    def test_role_without_questions(self, wizard, repos):
        repos[0].get_role_questions.return_value = []
        wizard.load_roles()
        wizard.start(1, consent=True)

        with pytest.raises(InvalidTransition, match="no questions"):
            wizard.next()
        assert isinstance(wizard.state, InProgress)


# ---------------------------------------------------------------------------
# Submitting
# ---------------------------------------------------------------------------

class TestSubmit:

    def test_submit_before_last_question(self, started):
        started.answer(11, 4)
        with pytest.raises(InvalidTransition):
            started.submit()

    def test_submit_with_missing_required(self, started):
        started.answer(11, 4)
        started.next()
        started.next()
        with pytest.raises(InvalidTransition):
            started.submit()

    def test_submit_sends_batch_then_completes(self, started, repos):
        answer_all(started)
        state = started.submit()

        assert isinstance(state, Completed)
        assert state.result.scores.overall == 72.4
        sent = repos[1].submit_answers.call_args.args[1]
        assert [a.question_id for a in sent] == [11, 13]
        repos[1].complete.assert_called_once_with(100)

    def test_second_submit_is_rejected(self, started, repos):
        answer_all(started)
        started.submit()
        with pytest.raises(InvalidTransition):
            started.submit()
        assert repos[1].submit_answers.call_count == 1

    def test_submit_while_submitting_is_rejected(self, started, repos):
        answer_all(started)
        seen = []

        def reentrant(*args):
            seen.append(started.state)
            with pytest.raises(InvalidTransition):
                started.submit()

        repos[1].submit_answers.side_effect = reentrant
        started.submit()
        assert isinstance(seen[0], Submitting)

    def test_failure_keeps_answers_for_retry(self, started, repos):
        answer_all(started)
        repos[1].complete.side_effect = HttpStatusError("Scoring unavailable", status_code=503)

        state = started.submit()
        assert isinstance(state, Failed)
        assert state.message == "Scoring unavailable"

        resumed = started.retry()
        assert isinstance(resumed, InProgress)
        assert set(resumed.answers) == {11, 13}

        repos[1].complete.side_effect = None
        assert isinstance(started.submit(), Completed)

    def test_unexpected_error_does_not_leave_submitting(self, started, repos):
        answer_all(started)
        repos[1].submit_answers.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            started.submit()
        assert isinstance(started.state, InProgress)
        assert set(started.state.answers) == {11, 13}


class TestSubmitResponses:
    """Real AssessmentRepository over a mocked API client"""

    @pytest.fixture()
    def responses(self):
        return {"assessments": {"id": 100, "roleId": 1, "status": "IN_PROGRESS"}}

    @pytest.fixture()
    def api(self, responses):
        api = MagicMock()
        api.post.side_effect = lambda path, json=None: responses.get(path.rsplit("/", 1)[-1])
        return api

    @pytest.fixture()
    def started(self, repos, api):
        catalog, _, plans, reports = repos
        wizard = AssessmentWizard(catalog, AssessmentRepository(api), plans, reports, user_id="u-1")
        wizard.load_roles()
        wizard.start(1, consent=True)
        answer_all(wizard)
        return wizard

    def test_null_scores_complete(self, started, responses):
        responses["complete"] = {"id": 100, "status": "COMPLETED", "scores": None}

        state = started.submit()

        assert isinstance(state, Completed)
        assert state.assessment_id == 100
        assert state.result.scores.overall is None

    def test_malformed_result_fails_with_retry(self, started, responses):
        responses["complete"] = {"id": 100, "scores": {"overall": "high"}, "gaps": "none"}

        state = started.submit()

        assert isinstance(state, Failed)
        assert state.message == "Unexpected response from the server"
        assert isinstance(started.retry(), InProgress)


# ---------------------------------------------------------------------------
# Completed
# ---------------------------------------------------------------------------

class TestCompleted:

    @pytest.fixture()
    def completed(self, started):
        answer_all(started)
        started.submit()
        return started

    def test_generate_plan(self, completed, repos):
        state = completed.generate_plan(5)
        assert state.plan.summary == "Plan"
        repos[2].generate.assert_called_once_with(100, 5)

    def test_plan_failure_stays_completed(self, completed, repos):
        repos[2].generate.side_effect = NetworkError("offline")
        state = completed.generate_plan()
        assert isinstance(state, Completed)
        assert state.error == "offline"

        repos[2].generate.side_effect = None
        state = completed.generate_plan()
        assert state.plan is not None
        assert state.error is None

    def test_request_report(self, completed):
        completed.request_report()
        assert completed.report_url() == "http://x/r-1.pdf"

    def test_report_url_before_request(self, completed):
        assert completed.report_url() is None

    def test_restart(self, completed):
        assert isinstance(completed.restart(), NotStarted)

    def test_retry_only_from_failed(self, completed):
        with pytest.raises(InvalidTransition):
            completed.retry()
