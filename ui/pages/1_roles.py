"""
Roles Management UI.

Lists roles with search, pagination and delete confirmation, and hosts the
create/edit form plus the per-role question assignment and version history.
The current view and list state live in the URL query string.
"""

import sys
from pathlib import Path

# Add parent directory to path
root_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(root_dir))

import streamlit as st

from services import Pagination, RoleForm
from ui.context import (
    flash,
    get_delete_confirmation,
    get_question_service,
    get_role_service,
    navigate,
    read_list_query,
    show_flash,
    track_route,
    write_list_query,
)
from utils.errors import ApiError, ValidationError, describe_error
from utils.formatting import format_date, format_relative_time, pillar_label, question_type_label, truncate

# Page configuration
st.set_page_config(
    page_title="Roles",
    page_icon="",
    layout="wide"
)

FILTERS = ("category",)


def get_roles_page(query):
    """Fetch one page of roles, None on failure"""
    try:
        return get_role_service().list(query.page, query.size, search=query.search)
    except ApiError as e:
        st.error(f"Error fetching roles: {describe_error(e)}")
        return None


def get_roles_in_category(category):
    try:
        return get_role_service().by_category(category)
    except ApiError as e:
        st.error(f"Error fetching roles: {describe_error(e)}")
        return []


def get_role(role_id):
    try:
        return get_role_service().get(role_id)
    except ApiError as e:
        st.error(f"Error fetching role: {describe_error(e)}")
        return None


def get_role_questions(role_id):
    try:
        return get_role_service().questions(role_id)
    except ApiError as e:
        st.error(f"Error fetching role questions: {describe_error(e)}")
        return []


def get_role_versions(role_id):
    try:
        return get_role_service().versions(role_id)
    except ApiError as e:
        st.error(f"Error fetching versions: {describe_error(e)}")
        return []


def get_all_questions():
    """First large page of the question bank for the assign picker"""
    try:
        return get_question_service().list(0, 100).content
    except ApiError as e:
        st.error(f"Error fetching questions: {describe_error(e)}")
        return []


# ============ LIST ============

@st.dialog("Delete role")
def confirm_delete_role(role):
    confirmation = get_delete_confirmation("roles")
    st.write(f"Delete **{role.name}**? This cannot be undone.")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Delete", type="primary", use_container_width=True):
            if confirmation.confirm(role.id):
                try:
                    get_role_service().delete(role.id)
                    flash(f"Role deleted: {role.name}")
                except ApiError as e:
                    st.error(f"Error deleting role: {describe_error(e)}")
                    return
            st.rerun()
    with col2:
        if st.button("Cancel", use_container_width=True):
            confirmation.cancel()
            st.rerun()


def render_role_row(role, query):
    col1, col2, col3, col4, col5 = st.columns([3, 2, 2, 1, 1])
    with col1:
        st.markdown(f"**{role.name}**")
        if role.description:
            st.caption(truncate(role.description, 100))
    with col2:
        st.write(role.category)
    with col3:
        status = "Active" if role.active else "Inactive"
        st.write(f"{status} · {format_relative_time(role.updated_at or role.created_at)}")
    with col4:
        if st.button("Edit", key=f"edit_{role.id}"):
            navigate(view="edit", id=role.id, **query.to_query_params())
        if st.button("Questions", key=f"detail_{role.id}"):
            navigate(view="detail", id=role.id, **query.to_query_params())
    with col5:
        if st.button("Delete", key=f"delete_{role.id}"):
            get_delete_confirmation("roles").request(role.id)
            confirm_delete_role(role)


def render_list():
    query = read_list_query(FILTERS)

    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        with st.form("role_search_form"):
            term = st.text_input("Search roles", value=query.search, placeholder="Name or description")
            if st.form_submit_button("Search"):
                write_list_query(query.with_search(term))
    with col2:
        with st.form("role_category_form"):
            category = st.text_input("Category", value=query.filter("category") or "")
            if st.form_submit_button("Filter"):
                write_list_query(query.with_filter("category", category.strip()))
    with col3:
        st.write("")
        if st.button("New role", type="primary"):
            navigate(view="new", **query.to_query_params())
        if query.search or query.filters:
            if st.button("Clear"):
                write_list_query(query.clear_filters().with_search(""))

    st.divider()

    category = query.filter("category")
    if category:
        # Category lookups are not paginated server side
        roles = get_roles_in_category(category)
        if query.search:
            term = query.search.lower()
            roles = [r for r in roles if term in r.name.lower() or term in (r.description or "").lower()]
        if not roles:
            st.info(f"No roles in category '{category}'.")
        for role in roles:
            render_role_row(role, query)
        return

    page = get_roles_page(query)
    if page is None:
        if st.button("Retry"):
            st.rerun()
        return

    if not page.content:
        st.info("No roles found." if query.search else "No roles yet. Create the first one.")
        return

    for role in page.content:
        render_role_row(role, query)

    pagination = Pagination.from_page(page)
    st.divider()
    col1, col2, col3 = st.columns([1, 3, 1])
    with col1:
        if st.button("Previous", disabled=not pagination.has_previous):
            write_list_query(query.with_page(pagination.number - 1))
    with col2:
        st.caption(f"{pagination.range_label} · {pagination.label}")
    with col3:
        if st.button("Next", disabled=not pagination.has_next):
            write_list_query(query.with_page(pagination.number + 1))


# ============ CREATE / EDIT ============

def back_to_list():
    query = read_list_query(FILTERS)
    navigate(**query.to_query_params())


def render_form(role_id=None):
    if role_id is not None:
        role = get_role(role_id)
        if role is None:
            if st.button("Back to roles"):
                back_to_list()
            return
        form = RoleForm.from_entity(role)
        st.subheader(f"Edit role: {role.name}")
    else:
        form = RoleForm()
        st.subheader("New role")

    with st.form("role_form"):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name *", value=form.draft["name"] or "")
        with col2:
            category = st.text_input("Category *", value=form.draft["category"] or "")
        description = st.text_area("Description", value=form.draft["description"] or "")
        active = form.draft["active"]
        if form.is_edit:
            active = st.checkbox("Active", value=form.draft["active"])

        submitted = st.form_submit_button("Save", type="primary")

    if submitted:
        form.set("name", name)
        form.set("category", category)
        form.set("description", description)
        form.set("active", active)
        try:
            with st.spinner("Saving..."):
                saved = form.submit(get_role_service())
            flash(f"Role saved: {saved.name}")
            back_to_list()
        except ValidationError as e:
            for message in e.errors.values():
                st.error(message)
        except ApiError as e:
            st.error(f"Error saving role: {describe_error(e)}")

    if st.button("Cancel"):
        back_to_list()


# ============ QUESTIONS & VERSIONS ============

def render_questions_tab(role_id):
    service = get_role_service()
    assigned = get_role_questions(role_id)

    if not assigned:
        st.info("No questions assigned to this role yet.")
    for question in assigned:
        col1, col2 = st.columns([5, 1])
        with col1:
            st.markdown(f"**{question.text}**")
            st.caption(f"{pillar_label(question.pillar)} · {question_type_label(question.type)}")
        with col2:
            if st.button("Remove", key=f"remove_{question.id}"):
                try:
                    service.remove_question(role_id, question.id)
                    flash("Question removed")
                    st.rerun()
                except ApiError as e:
                    st.error(f"Error removing question: {describe_error(e)}")

    st.divider()
    assigned_ids = {str(q.id) for q in assigned}
    available = [q for q in get_all_questions() if str(q.id) not in assigned_ids]
    if not available:
        st.caption("Every question in the bank is already assigned.")
        return

    choice = st.selectbox(
        "Assign a question",
        options=available,
        format_func=lambda q: f"[{pillar_label(q.pillar)}] {truncate(q.text, 80)}",
    )
    if st.button("Assign", type="primary"):
        try:
            service.assign_question(role_id, choice.id)
            flash("Question assigned")
            st.rerun()
        except ApiError as e:
            st.error(f"Error assigning question: {describe_error(e)}")


def render_versions_tab(role_id):
    versions = get_role_versions(role_id)
    if not versions:
        st.info("No versions yet. Assigning a question creates the first one.")
        return

    for version in sorted(versions, key=lambda v: v.version_number, reverse=True):
        title = f"Version {version.version_number}"
        if version.active:
            title += " (active)"
        with st.expander(f"{title} · {format_date(version.created_at)} · {len(version.questions)} questions"):
            for item in version.questions:
                st.markdown(f"- {item.question.text}")
            if not version.active:
                if st.button("Activate", key=f"activate_{version.version_number}"):
                    try:
                        with st.spinner("Activating..."):
                            get_role_service().activate_version(role_id, version.version_number)
                        flash(f"Version {version.version_number} activated")
                        st.rerun()
                    except ApiError as e:
                        st.error(f"Error activating version: {describe_error(e)}")


def render_detail(role_id):
    role = get_role(role_id)
    if st.button("Back to roles"):
        back_to_list()
    if role is None:
        return

    st.subheader(role.name)
    st.caption(f"{role.category} · {'Active' if role.active else 'Inactive'}")
    if role.description:
        st.write(role.description)

    tab1, tab2 = st.tabs(["Questions", "Versions"])
    with tab1:
        render_questions_tab(role.id)
    with tab2:
        render_versions_tab(role.id)


def main():
    st.title("Roles")
    show_flash()

    view = st.query_params.get("view", "list")
    role_id = st.query_params.get("id")
    track_route("roles", view, role_id)

    if view == "new":
        render_form()
    elif view == "edit" and role_id:
        render_form(role_id)
    elif view == "detail" and role_id:
        render_detail(role_id)
    else:
        render_list()


main()
