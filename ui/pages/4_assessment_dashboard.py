"""
Assessment Dashboard.

Looks up a completed assessment by id (``?assessment_id=`` in the URL) and
shows its summary, the generated plan if any, and report generation with
optional email delivery.
"""

import sys
from pathlib import Path

# Add parent directory to path
root_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(root_dir))

import streamlit as st

from ui.context import (
    get_assessment_repository,
    get_plan_repository,
    get_report_repository,
    track_route,
)
from utils.errors import ApiError, NotFoundError, describe_error
from utils.formatting import format_date, format_percent, score_color, score_label

# Page configuration
st.set_page_config(
    page_title="Assessment Dashboard",
    page_icon="📊",
    layout="wide"
)


def get_summary(assessment_id):
    try:
        return get_assessment_repository().get_summary(assessment_id)
    except NotFoundError:
        st.warning(f"No completed assessment with id {assessment_id}.")
        return None
    except ApiError as e:
        st.error(f"Error fetching assessment: {describe_error(e)}")
        return None


def get_plan(assessment_id):
    """Existing plan for the assessment, None when none was generated"""
    try:
        return get_plan_repository().get_by_assessment(assessment_id)
    except NotFoundError:
        return None
    except ApiError as e:
        st.error(f"Error fetching plan: {describe_error(e)}")
        return None


def report_state_key(assessment_id):
    return f"dashboard_report_{assessment_id}"


def render_summary(summary):
    overall = summary.scores.overall
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Overall readiness", format_percent(overall), score_label(overall))
    with col2:
        st.metric("Answers", summary.answer_count)
    with col3:
        st.metric("Completed", format_date(summary.completed_at) or "-")

    cols = st.columns(4)
    for col, (pillar, score) in zip(cols, summary.scores.by_pillar().items()):
        with col:
            st.markdown(f"**{pillar}**")
            st.markdown(f":{score_color(score)}[{format_percent(score)}]")
            st.caption(score_label(score))

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Top gaps")
        if not summary.top_gaps:
            st.caption("None identified.")
        for gap in summary.top_gaps:
            st.markdown(f"- {gap}")
    with col2:
        st.subheader("Top recommendations")
        if not summary.top_recommendations:
            st.caption("None yet.")
        for recommendation in summary.top_recommendations:
            st.markdown(f"- {recommendation}")


def render_report(assessment_id):
    reports = get_report_repository()
    key = report_state_key(assessment_id)
    report = st.session_state.get(key)

    if report is None:
        if st.button("Generate report", type="primary"):
            try:
                with st.spinner("Generating report..."):
                    st.session_state[key] = reports.request(assessment_id)
                st.rerun()
            except ApiError as e:
                st.error(f"Error generating report: {describe_error(e)}")
        return

    st.write(f"**{report.title or 'Report'}**" + (f" · {report.status}" if report.status else ""))
    if report.expires_at:
        st.caption(f"Link expires {format_date(report.expires_at)}")
    col1, col2 = st.columns([1, 4])
    with col1:
        st.link_button("Download report", reports.download_url(report))
    with col2:
        if st.button("Refresh status"):
            try:
                st.session_state[key] = reports.get(report.report_id)
                st.rerun()
            except ApiError as e:
                st.error(f"Error refreshing report: {describe_error(e)}")

    with st.form("email_report_form"):
        email = st.text_input("Send the report by email")
        if st.form_submit_button("Send"):
            if "@" not in email:
                st.error("Please enter a valid email address.")
            else:
                try:
                    with st.spinner("Sending..."):
                        reports.email(report.report_id, email.strip())
                    st.success(f"Report sent to {email.strip()}")
                except ApiError as e:
                    st.error(f"Error sending report: {describe_error(e)}")


def main():
    st.title("Assessment Dashboard")
    track_route("dashboard")

    with st.form("lookup_form"):
        assessment_id = st.text_input("Assessment ID", value=st.query_params.get("assessment_id", ""))
        if st.form_submit_button("Open"):
            st.query_params["assessment_id"] = assessment_id.strip()
            st.rerun()

    assessment_id = st.query_params.get("assessment_id")
    if not assessment_id:
        st.info("Enter the ID shown at the end of an assessment.")
        return

    summary = get_summary(assessment_id)
    if summary is None:
        return

    render_summary(summary)

    st.divider()
    st.subheader("Development plan")
    plan = get_plan(assessment_id)
    if plan is None:
        st.caption("No plan generated for this assessment yet.")
    else:
        if plan.time_budget_hours_per_week:
            st.caption(f"{plan.time_budget_hours_per_week} hours per week")
        if plan.summary:
            st.write(plan.summary)
        if plan.content:
            st.markdown(plan.content)
        for priority in plan.priorities:
            st.markdown(f"- **{priority.name}**" + (f": {priority.why}" if priority.why else ""))

    st.divider()
    st.subheader("Report")
    render_report(assessment_id)


main()
