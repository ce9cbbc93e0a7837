"""
AI Readiness Assessment.

Public wizard: pick a role, answer its questions one at a time, submit and
review the scores, then request a development plan and a report. All state
lives in the session's AssessmentWizard; this page only renders it.
"""

import sys
from pathlib import Path

# Add parent directory to path
root_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(root_dir))

import streamlit as st

from config.settings import settings
from models.question import QuestionType
from services import Completed, Failed, InProgress, NotStarted, Submitting
from ui.context import get_wizard, track_route
from utils.errors import InvalidTransition, ValidationError
from utils.formatting import (
    LIKERT_SCALE,
    format_percent,
    pillar_label,
    round_percent,
    score_color,
    score_label,
)

# Page configuration
st.set_page_config(
    page_title="AI Readiness Assessment",
    page_icon="🧭",
    layout="centered"
)


def run_action(action, *args, **kwargs):
    """Call a wizard action, showing rule violations instead of raising"""
    try:
        action(*args, **kwargs)
    except InvalidTransition as e:
        st.warning(str(e))
        return False
    st.rerun()


# ============ ROLE SELECTION ============

def render_not_started(wizard, state):
    assessment_id = st.query_params.get("assessment_id")
    if assessment_id:
        with st.spinner("Loading results..."):
            wizard.open_results(assessment_id)
        st.rerun()

    if not state.roles:
        with st.spinner("Loading roles..."):
            wizard.load_roles()
        if isinstance(wizard.state, NotStarted) and not wizard.state.roles:
            st.info("No roles are available for assessment right now.")
            return
        st.rerun()

    st.write(
        "Find out how ready you are to work with AI in your role. "
        "Answer a short set of questions and get a personal score and plan."
    )

    with st.form("start_assessment_form"):
        role = st.selectbox(
            "Your role *",
            options=list(state.roles),
            index=None,
            format_func=lambda r: f"{r.name} ({r.category})" if r.category else r.name,
            placeholder="Select a role",
        )
        email = st.text_input("Email (optional)", help="We can send your report here")
        consent = st.checkbox("I agree that my answers are stored to compute my results *")
        submitted = st.form_submit_button("Start assessment", type="primary")

    if submitted:
        try:
            with st.spinner("Starting..."):
                wizard.start(role.id if role else None, consent=consent, email=email.strip() or None)
            st.rerun()
        except ValidationError as e:
            for message in e.errors.values():
                st.error(message)


# ============ QUESTIONS ============

def answer_key(state, question):
    return f"answer_{state.assessment.id}_{question.id}"


def record_answer(wizard, question_id, key):
    wizard.answer(question_id, st.session_state.get(key))


def render_answer_input(wizard, state, question):
    key = answer_key(state, question)
    current = state.current_answer
    on_change_args = (wizard, question.id, key)

    if question.type is QuestionType.TEXT:
        st.text_area(
            "Your answer",
            value=current.value_text if current else "",
            key=key,
            on_change=record_answer,
            args=on_change_args,
        )
        return

    if question.type is QuestionType.LIKERT:
        values = list(LIKERT_SCALE)
        labels = question.options if len(question.options) == len(values) else [str(v) for v in values]
    else:
        values = list(range(1, len(question.options) + 1))
        labels = question.options

    index = None
    if current is not None and current.value_numeric in values:
        index = values.index(current.value_numeric)

    st.radio(
        "Your answer",
        options=values,
        index=index,
        format_func=lambda v: labels[values.index(v)],
        horizontal=question.type is QuestionType.LIKERT,
        key=key,
        on_change=record_answer,
        args=on_change_args,
    )


def render_in_progress(wizard, state):
    question = state.current_question
    if question is None:
        st.warning("This role has no questions yet.")
        if st.button("Choose another role"):
            run_action(wizard.restart)
        return

    st.caption(f"{state.role.name} · Question {state.index + 1} of {len(state.questions)}")
    st.progress(min(int(state.progress), 100))

    st.subheader(question.text)
    st.caption(pillar_label(question.pillar) + ("" if question.required else " · Optional"))
    if question.context:
        st.info(question.context)

    render_answer_input(wizard, state, question)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Previous", disabled=state.index == 0, use_container_width=True):
            run_action(wizard.previous)
    with col2:
        if state.is_last:
            missing = state.missing_required()
            if missing:
                st.caption(f"{len(missing)} required question(s) unanswered")
            if st.button("Submit", type="primary", disabled=bool(missing), use_container_width=True):
                with st.spinner("Scoring your answers..."):
                    run_action(wizard.submit)
        else:
            if st.button("Next", type="primary", disabled=not state.can_advance, use_container_width=True):
                run_action(wizard.next)


# ============ RESULTS ============

def render_scores(result):
    overall = result.scores.overall
    st.metric("Overall readiness", format_percent(overall), score_label(overall))

    for pillar, score in result.scores.by_pillar().items():
        if score is None:
            continue
        st.markdown(f"**{pillar}**: :{score_color(score)}[{format_percent(score)} · {score_label(score)}]")
        st.progress(min(max(round_percent(score), 0), 100))

    if result.gaps:
        st.subheader("Gaps")
        for gap in result.gaps:
            st.markdown(f"- {gap}")
    if result.recommendations:
        st.subheader("Recommendations")
        for recommendation in result.recommendations:
            st.markdown(f"- {recommendation}")


def render_plan(plan):
    if plan.summary:
        st.write(plan.summary)
    if plan.content:
        st.markdown(plan.content)
    for priority in plan.priorities:
        with st.expander(priority.name):
            if priority.why:
                st.write(priority.why)
            if priority.milestones:
                for label, tasks in (
                    ("30 days", priority.milestones.d30),
                    ("60 days", priority.milestones.d60),
                    ("90 days", priority.milestones.d90),
                ):
                    if tasks:
                        st.markdown(f"**{label}**")
                        for task in tasks:
                            st.markdown(f"- {task.task}")
            for evidence in priority.evidence_of_done:
                st.markdown(f"✓ {evidence}")


def render_completed(wizard, state):
    st.query_params["assessment_id"] = str(state.assessment_id)

    if state.role is not None:
        st.caption(state.role.name)
    render_scores(state.result)

    if state.error:
        st.error(state.error)

    st.divider()
    st.subheader("Development plan")
    if state.plan is None:
        hours = st.number_input(
            "Hours per week you can invest",
            min_value=1,
            max_value=40,
            value=settings.PLAN_HOURS_PER_WEEK,
        )
        if st.button("Generate plan", type="primary"):
            with st.spinner("Generating plan..."):
                run_action(wizard.generate_plan, int(hours))
    else:
        render_plan(state.plan)

    st.divider()
    st.subheader("Report")
    if state.report is None:
        if st.button("Create report"):
            with st.spinner("Creating report..."):
                run_action(wizard.request_report)
    else:
        st.link_button("Download report", wizard.report_url())

    st.divider()
    st.caption(f"Assessment ID: {state.assessment_id}. Open it later from the assessment dashboard.")
    if st.button("Start a new assessment"):
        st.query_params.clear()
        run_action(wizard.restart)


def render_failed(wizard, state):
    st.error(state.message)
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Retry", type="primary", use_container_width=True):
            run_action(wizard.retry)
    with col2:
        if st.button("Start over", use_container_width=True):
            st.query_params.clear()
            run_action(wizard.restart)


def main():
    st.title("AI Readiness Assessment")
    track_route("assessment")
    wizard = get_wizard()
    state = wizard.state

    if isinstance(state, NotStarted):
        render_not_started(wizard, state)
    elif isinstance(state, InProgress):
        render_in_progress(wizard, state)
    elif isinstance(state, Submitting):
        st.info("Submitting your answers...")
        if st.button("Start over"):
            st.query_params.clear()
            run_action(wizard.restart)
    elif isinstance(state, Completed):
        render_completed(wizard, state)
    elif isinstance(state, Failed):
        render_failed(wizard, state)


main()
