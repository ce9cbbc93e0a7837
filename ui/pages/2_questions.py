"""
Questions Management UI.

Question bank with search, pillar/type filters and pagination, plus the
create/edit form with its option list editor.
"""

import sys
from pathlib import Path

# Add parent directory to path
root_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(root_dir))

import streamlit as st

from models.question import Pillar, QuestionType
from services import Pagination, QuestionForm
from ui.context import (
    flash,
    get_delete_confirmation,
    get_question_service,
    navigate,
    read_list_query,
    show_flash,
    track_route,
    write_list_query,
)
from utils.errors import ApiError, ValidationError, describe_error
from utils.formatting import (
    LIKERT_SCALE,
    format_relative_time,
    pillar_label,
    question_type_label,
    truncate,
)

# Page configuration
st.set_page_config(
    page_title="Questions",
    page_icon="",
    layout="wide"
)

FILTERS = ("pillar", "type")
ALL = "All"


def get_questions_page(query):
    """Fetch one page of questions, None on failure"""
    try:
        return get_question_service().list(
            query.page,
            query.size,
            search=query.search,
            pillar=query.filter("pillar"),
            type=query.filter("type"),
        )
    except ApiError as e:
        st.error(f"Error fetching questions: {describe_error(e)}")
        return None


def get_question(question_id):
    try:
        return get_question_service().get(question_id)
    except ApiError as e:
        st.error(f"Error fetching question: {describe_error(e)}")
        return None


# ============ LIST ============

@st.dialog("Delete question")
def confirm_delete_question(question):
    confirmation = get_delete_confirmation("questions")
    st.write(f"Delete **{truncate(question.text, 80)}**? This cannot be undone.")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Delete", type="primary", use_container_width=True):
            if confirmation.confirm(question.id):
                try:
                    get_question_service().delete(question.id)
                    flash("Question deleted")
                except ApiError as e:
                    st.error(f"Error deleting question: {describe_error(e)}")
                    return
            st.rerun()
    with col2:
        if st.button("Cancel", use_container_width=True):
            confirmation.cancel()
            st.rerun()


def filter_select(label, enum_class, label_func, current):
    options = [ALL] + [member.value for member in enum_class]
    index = options.index(current) if current in options else 0
    return st.selectbox(
        label,
        options=options,
        index=index,
        format_func=lambda value: value if value == ALL else label_func(value),
    )


def render_list():
    query = read_list_query(FILTERS)

    with st.form("question_filter_form"):
        col1, col2, col3 = st.columns([3, 1, 1])
        with col1:
            term = st.text_input("Search questions", value=query.search)
        with col2:
            pillar = filter_select("Pillar", Pillar, pillar_label, query.filter("pillar"))
        with col3:
            question_type = filter_select("Type", QuestionType, question_type_label, query.filter("type"))
        if st.form_submit_button("Apply"):
            new_query = (
                query.with_search(term)
                .with_filter("pillar", None if pillar == ALL else pillar)
                .with_filter("type", None if question_type == ALL else question_type)
            )
            write_list_query(new_query)

    if st.button("New question", type="primary"):
        navigate(view="new", **query.to_query_params())

    st.divider()

    page = get_questions_page(query)
    if page is None:
        if st.button("Retry"):
            st.rerun()
        return

    if not page.content:
        st.info("No questions match these filters." if query.search or query.filters else "No questions yet.")
        return

    for question in page.content:
        col1, col2, col3, col4 = st.columns([5, 2, 1, 1])
        with col1:
            st.markdown(f"**{truncate(question.text, 120)}**")
            if question.options:
                st.caption(" · ".join(question.options))
        with col2:
            st.write(f"{pillar_label(question.pillar)} · {question_type_label(question.type)}")
            st.caption(format_relative_time(question.updated_at or question.created_at))
        with col3:
            if st.button("Edit", key=f"edit_{question.id}"):
                navigate(view="edit", id=question.id, **query.to_query_params())
        with col4:
            if st.button("Delete", key=f"delete_{question.id}"):
                get_delete_confirmation("questions").request(question.id)
                confirm_delete_question(question)

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

def form_key(question_id):
    return f"question_form_{question_id or 'new'}"


def load_form(question_id):
    """
    Get the draft for this question from the session, creating it on first
    visit. Widget keys are seeded from the draft at the same time.
    """
    key = form_key(question_id)
    if key not in st.session_state:
        if question_id is None:
            form = QuestionForm()
        else:
            question = get_question(question_id)
            if question is None:
                return None
            form = QuestionForm.from_entity(question)
        st.session_state[key] = form
        st.session_state[f"{key}_text"] = form.draft["text"] or ""
        st.session_state[f"{key}_type"] = form.draft["type"].value
        st.session_state[f"{key}_pillar"] = form.draft["pillar"].value
        st.session_state[f"{key}_context"] = form.draft["context"] or ""
        st.session_state[f"{key}_new_option"] = ""
    return st.session_state[key]


def discard_form(question_id):
    key = form_key(question_id)
    for name in list(st.session_state.keys()):
        if name == key or name.startswith(f"{key}_"):
            del st.session_state[name]


def back_to_list(question_id):
    discard_form(question_id)
    query = read_list_query(FILTERS)
    navigate(**query.to_query_params())


def add_option(form, key):
    if form.add_option(st.session_state[f"{key}_new_option"]):
        st.session_state[f"{key}_new_option"] = ""


def use_likert_scale(form):
    for value in LIKERT_SCALE:
        form.add_option(str(value))


def update(form, field, value):
    """Apply a widget value only when it changed, so field errors survive reruns"""
    current = form.draft[field]
    if getattr(current, "value", current) != value and not (value == "" and current is None):
        form.set(field, value)


def render_form(question_id=None):
    form = load_form(question_id)
    if form is None:
        if st.button("Back to questions"):
            back_to_list(question_id)
        return
    key = form_key(question_id)

    st.subheader("Edit question" if form.is_edit else "New question")

    update(form, "text", st.text_area("Question text *", key=f"{key}_text"))
    if "text" in form.errors:
        st.error(form.errors["text"])

    col1, col2 = st.columns(2)
    with col1:
        update(
            form,
            "type",
            st.selectbox(
                "Type",
                options=[t.value for t in QuestionType],
                format_func=question_type_label,
                key=f"{key}_type",
            ),
        )
    with col2:
        update(
            form,
            "pillar",
            st.selectbox(
                "Pillar",
                options=[p.value for p in Pillar],
                format_func=pillar_label,
                key=f"{key}_pillar",
            ),
        )

    if form.needs_options:
        st.markdown("**Options**")
        if not form.draft["options"]:
            st.caption("No options yet.")
        for index, option in enumerate(form.draft["options"]):
            col1, col2 = st.columns([6, 1])
            with col1:
                st.write(f"{index + 1}. {option}")
            with col2:
                st.button("Remove", key=f"{key}_remove_{index}", on_click=form.remove_option, args=(index,))

        col1, col2 = st.columns([6, 1])
        with col1:
            st.text_input("New option", key=f"{key}_new_option", label_visibility="collapsed",
                          placeholder="New option")
        with col2:
            st.button("Add", key=f"{key}_add", on_click=add_option, args=(form, key))
        if form.draft["type"] is QuestionType.LIKERT and not form.draft["options"]:
            st.button("Use 1-5 scale", key=f"{key}_likert", on_click=use_likert_scale, args=(form,))
        if "options" in form.errors:
            st.error(form.errors["options"])

    update(form, "context", st.text_area("Context", key=f"{key}_context",
                                           help="Optional guidance shown under the question"))

    col1, col2 = st.columns([1, 5])
    with col1:
        if st.button("Save", type="primary"):
            try:
                with st.spinner("Saving..."):
                    form.submit(get_question_service())
                flash("Question saved")
                back_to_list(question_id)
            except ValidationError:
                st.rerun()
            except ApiError as e:
                st.error(f"Error saving question: {describe_error(e)}")
    with col2:
        if st.button("Cancel"):
            back_to_list(question_id)


def main():
    st.title("Questions")
    show_flash()

    view = st.query_params.get("view", "list")
    question_id = st.query_params.get("id")
    track_route("questions", view, question_id)

    if view == "new":
        render_form()
    elif view == "edit" and question_id:
        render_form(question_id)
    else:
        render_list()


main()
