"""
Assessment wizard state machine.

The wizard is always in exactly one of these states:

    NotStarted -> InProgress -> Submitting -> Completed
                        \\            \\
                         `------------`--> Failed --(retry)--> previous state

Answers are buffered locally, keyed by question id (last write wins), and
sent to the server in one batch when the last question is submitted. Every
action checks the current state and raises InvalidTransition when it does
not apply, so e.g. a second submit while one is in flight is rejected.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, Union

from config.settings import settings
from models.assessment import Assessment, AssessmentResult, NumericAnswer, TextAnswer, answer_for
from models.base import EntityId
from models.plan import Plan, Report
from models.question import Question
from models.role import Role
from repositories.assessment_repository import AssessmentRepository
from repositories.catalog_repository import CatalogRepository
from repositories.plan_repository import PlanRepository
from repositories.report_repository import ReportRepository
from utils.errors import ApiError, InvalidTransition, ValidationError, describe_error

logger = logging.getLogger(__name__)

AnswerValue = Union[NumericAnswer, TextAnswer]


# ============ STATES ============

@dataclass(frozen=True)
class NotStarted:
    """Role selection. ``roles`` is empty until the catalog is loaded."""
    roles: Tuple[Role, ...] = ()


@dataclass(frozen=True)
class InProgress:
    """Answering questions one at a time."""
    assessment: Assessment
    role: Role
    questions: Tuple[Question, ...]
    index: int = 0
    answers: Dict[EntityId, AnswerValue] = field(default_factory=dict)

    @property
    def current_question(self) -> Optional[Question]:
        if not self.questions:
            return None
        return self.questions[self.index]

    @property
    def current_answer(self) -> Optional[AnswerValue]:
        question = self.current_question
        return self.answers.get(question.id) if question else None

    @property
    def is_last(self) -> bool:
        return bool(self.questions) and self.index == len(self.questions) - 1

    @property
    def can_advance(self) -> bool:
        """The current question is optional or already answered."""
        question = self.current_question
        if question is None:
            return False
        return not question.required or question.id in self.answers

    @property
    def progress(self) -> float:
        """Percent of the way through, counting the current question."""
        if not self.questions:
            return 0.0
        return (self.index + 1) / len(self.questions) * 100

    def missing_required(self) -> List[Question]:
        return [q for q in self.questions if q.required and q.id not in self.answers]

    def ordered_answers(self) -> List[AnswerValue]:
        """Answers in question order, unanswered questions skipped."""
        return [self.answers[q.id] for q in self.questions if q.id in self.answers]


@dataclass(frozen=True)
class Submitting:
    """Answers are on their way to the server."""
    assessment: Assessment
    role: Role
    answers: Tuple[AnswerValue, ...]


@dataclass(frozen=True)
class Completed:
    """
    Scored assessment. Plan and report are filled in on request; ``error``
    holds the message of the last failed plan/report request.
    """
    result: AssessmentResult
    role: Optional[Role] = None
    plan: Optional[Plan] = None
    report: Optional[Report] = None
    error: Optional[str] = None

    @property
    def assessment_id(self) -> EntityId:
        return self.result.assessment_id


@dataclass(frozen=True)
class Failed:
    """A network call failed; ``resume`` is where retry() goes back to."""
    message: str
    resume: Any = None


WizardState = Union[NotStarted, InProgress, Submitting, Completed, Failed]


# ============ WIZARD ============

class AssessmentWizard:
    """
    Drives one assessment session from role selection to results.

    One instance lives in each user's session; the repositories are shared.
    """

    def __init__(
        self,
        catalog: CatalogRepository,
        assessments: AssessmentRepository,
        plans: PlanRepository,
        reports: ReportRepository,
        user_id: Optional[str] = None,
    ):
        """
        Args:
            catalog: Public role/question catalog
            assessments: Assessment lifecycle endpoints
            plans: Plan generation endpoints
            reports: Report generation endpoints
            user_id: Identifier sent when creating the assessment
        """
        self.catalog = catalog
        self.assessments = assessments
        self.plans = plans
        self.reports = reports
        self.user_id = user_id or settings.DEFAULT_USER_ID
        self.state: WizardState = NotStarted()

    @property
    def phase(self) -> str:
        return type(self.state).__name__

    # ---------- NotStarted ----------

    def load_roles(self) -> WizardState:
        """Fetch the roles a user can be assessed for."""
        state = self._expect(NotStarted, action="load roles")
        try:
            roles = self.catalog.list_roles()
        except ApiError as exc:
            return self._fail(exc, resume=state)
        self.state = NotStarted(roles=tuple(roles))
        return self.state

    def start(self, role_id: EntityId, consent: bool, email: Optional[str] = None) -> WizardState:
        """
        Create the assessment on the server and load the role's questions.

        Raises:
            ValidationError: If no listed role is selected or consent is missing
        """
        state = self._expect(NotStarted, action="start")

        role = next((r for r in state.roles if str(r.id) == str(role_id)), None)
        errors = {}
        if role is None:
            errors["role"] = "Please select a role"
        if not consent:
            errors["consent"] = "Please accept the terms to continue"
        if errors:
            raise ValidationError(errors)

        try:
            assessment = self.assessments.create(
                user_id=self.user_id,
                role_id=role.id,
                consent=consent,
                email=email or None,
            )
            questions = self.catalog.get_role_questions(role.id)
        except ApiError as exc:
            return self._fail(exc, resume=state)

        logger.info(
            "Started assessment %s for role %s with %d questions",
            assessment.id, role.name, len(questions),
        )
        self.state = InProgress(assessment=assessment, role=role, questions=tuple(questions))
        return self.state

    def open_results(self, assessment_id: EntityId) -> WizardState:
        """Jump straight to the results of an already completed assessment."""
        state = self._expect(NotStarted, action="open results")
        try:
            result = self.assessments.get_results(assessment_id)
        except ApiError as exc:
            return self._fail(exc, resume=state)
        self.state = Completed(result=result)
        return self.state

    # ---------- InProgress ----------

    def answer(self, question_id: EntityId, value: Any) -> WizardState:
        """
        Record (or overwrite) the answer to one question.

        ``None`` or blank text clears the answer.
        """
        state = self._expect(InProgress, action="answer")
        question = next((q for q in state.questions if str(q.id) == str(question_id)), None)
        if question is None:
            raise ValueError(f"Question {question_id} is not part of this assessment")

        answers = dict(state.answers)
        if value is None or (not question.type.is_numeric and not str(value).strip()):
            answers.pop(question.id, None)
        else:
            answers[question.id] = answer_for(question, value)

        self.state = replace(state, answers=answers)
        return self.state

    def next(self) -> WizardState:
        """Advance one question. Stays on the last question."""
        state = self._expect(InProgress, action="continue")
        if state.current_question is None:
            raise InvalidTransition("This role has no questions")
        if not state.can_advance:
            raise InvalidTransition("This question is required")
        self.state = replace(state, index=min(state.index + 1, len(state.questions) - 1))
        return self.state

    def previous(self) -> WizardState:
        """Go back one question. Never blocked; stays on the first question."""
        state = self._expect(InProgress, action="go back")
        self.state = replace(state, index=max(state.index - 1, 0))
        return self.state

    def submit(self) -> WizardState:
        """
        Send every answer in one batch, then complete the assessment.

        Only legal on the last question with all required questions answered.
        """
        state = self._expect(InProgress, action="submit")
        if not state.is_last:
            raise InvalidTransition("Answer the remaining questions before submitting")
        missing = state.missing_required()
        if missing:
            raise InvalidTransition(f"{len(missing)} required question(s) still unanswered")

        answers = state.ordered_answers()
        self.state = Submitting(assessment=state.assessment, role=state.role, answers=tuple(answers))
        try:
            self.assessments.submit_answers(state.assessment.id, answers)
            result = self.assessments.complete(state.assessment.id)
        except ApiError as exc:
            return self._fail(exc, resume=state)
        except Exception:
            self.state = state
            raise

        logger.info("Completed assessment %s (%d answers)", state.assessment.id, len(answers))
        self.state = Completed(result=result, role=state.role)
        return self.state

    # ---------- Completed ----------

    def generate_plan(self, hours_per_week: Optional[int] = None) -> WizardState:
        """Request a development plan. Call again to retry after a failure."""
        state = self._expect(Completed, action="generate a plan")
        try:
            plan = self.plans.generate(state.assessment_id, hours_per_week or settings.PLAN_HOURS_PER_WEEK)
        except ApiError as exc:
            logger.error("Plan generation failed for %s: %s", state.assessment_id, exc)
            self.state = replace(state, error=describe_error(exc))
            return self.state
        self.state = replace(state, plan=plan, error=None)
        return self.state

    def request_report(self) -> WizardState:
        """Request a downloadable report. Call again to retry after a failure."""
        state = self._expect(Completed, action="request a report")
        try:
            report = self.reports.request(state.assessment_id)
        except ApiError as exc:
            logger.error("Report request failed for %s: %s", state.assessment_id, exc)
            self.state = replace(state, error=describe_error(exc))
            return self.state
        self.state = replace(state, report=report, error=None)
        return self.state

    def report_url(self) -> Optional[str]:
        state = self._expect(Completed, action="download the report")
        if state.report is None:
            return None
        return self.reports.download_url(state.report)

    # ---------- Failed / any ----------

    def retry(self) -> WizardState:
        """Return to the state the failed action started from."""
        state = self._expect(Failed, action="retry")
        self.state = state.resume if state.resume is not None else NotStarted()
        return self.state

    def restart(self) -> WizardState:
        """Discard everything and go back to role selection."""
        self.state = NotStarted()
        return self.state

    # ---------- helpers ----------

    def _expect(self, state_type: type, action: str):
        if not isinstance(self.state, state_type):
            raise InvalidTransition(f"Cannot {action} while {self.phase}")
        return self.state

    def _fail(self, exc: ApiError, resume: WizardState) -> WizardState:
        logger.error("Assessment wizard error in %s: %s", self.phase, exc)
        self.state = Failed(message=describe_error(exc), resume=resume)
        return self.state
