"""
Streamlit admin console for the AI readiness assessment.

Home page: catalog totals, recently added roles and questions and the
backend health status. Roles, Questions and the public Assessment live under
ui/pages/.
"""

import sys
from pathlib import Path

# Add parent directory to path so we can import from the root
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import streamlit as st

from config.settings import settings
from ui.context import get_admin_repository, get_dashboard_service, track_route
from utils.errors import ApiError, describe_error
from utils.formatting import format_relative_time, pillar_label, question_type_label, truncate

# Page configuration
st.set_page_config(
    page_title="AI Readiness Admin",
    page_icon="🧭",
    layout="wide"
)


def get_stats():
    """Fetch dashboard figures, None on failure."""
    try:
        return get_dashboard_service().stats()
    except ApiError as e:
        st.error(f"Error loading dashboard: {describe_error(e)}")
        return None


def show_health():
    """Backend status line in the sidebar."""
    try:
        status = get_admin_repository().health_check()
        st.sidebar.success(f"Backend: {status or 'OK'}")
    except ApiError as e:
        st.sidebar.error(f"Backend unreachable: {describe_error(e)}")


def main():
    st.title("AI Readiness Admin")
    track_route("home")
    st.caption(f"Connected to {settings.API_BASE_URL}")

    show_health()

    stats = get_stats()
    if stats is None:
        if st.button("Retry"):
            st.rerun()
        return

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Roles", stats.total_roles)
        st.page_link("pages/1_roles.py", label="Manage roles →")
    with col2:
        st.metric("Questions", stats.total_questions)
        st.page_link("pages/2_questions.py", label="Manage questions →")

    st.divider()

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Recent roles")
        if not stats.recent_roles:
            st.info("No roles yet.")
        for role in stats.recent_roles:
            status = "" if role.active else " (inactive)"
            st.markdown(
                f"**{role.name}**{status}  \n"
                f"{role.category} · updated {format_relative_time(role.updated_at or role.created_at)}"
            )

    with col2:
        st.subheader("Recent questions")
        if not stats.recent_questions:
            st.info("No questions yet.")
        for question in stats.recent_questions:
            st.markdown(
                f"**{truncate(question.text, 80)}**  \n"
                f"{pillar_label(question.pillar)} · {question_type_label(question.type)}"
            )

    st.divider()
    st.page_link("pages/3_assessment.py", label="Open the public assessment →")


if __name__ == "__main__":
    main()
