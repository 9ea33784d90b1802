"""
Recipe Finder - Streamlit Frontend Main Entry Point.

Single-page app: search recipes by one or more comma-separated ingredients,
browse the results grid, and open a recipe to see its ingredients, steps and
video link. All data comes from the FastAPI backend through utils.api_client;
what is displayed is held in a FinderState (utils.state).

Run with:
    streamlit run streamlit_app/app.py
"""

import html
import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import api.config and recipe_finder
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import streamlit as st

from recipe_finder.details import extract_ingredients, format_instructions
from recipe_finder.models import RecipeDetail, RecipeSummary
from recipe_finder.state import FinderState
from utils.api_client import get_health_status, get_suggestions
from utils.state import close_recipe, get_finder_state, open_recipe, reset_search, run_search
from ui.feedback import show_empty_state, show_error
from ui.styles import load_global_styles, pill_tag

QUERY_INPUT_KEY = "query_input"
GRID_COLUMNS = 3

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Recipe Finder",
    page_icon="🍳",
    layout="wide",
    initial_sidebar_state="collapsed",
)

load_global_styles()


# --- callbacks ---------------------------------------------------------------

def _on_submit() -> None:
    run_search(st.session_state.get(QUERY_INPUT_KEY, ""))


def _on_suggestion(ingredient: str) -> None:
    st.session_state[QUERY_INPUT_KEY] = ingredient
    run_search(ingredient)


def _on_search_again() -> None:
    st.session_state[QUERY_INPUT_KEY] = ""
    reset_search()


# --- rendering -----------------------------------------------------------------

def render_header() -> None:
    st.markdown("# 🍳 Recipe Finder")
    st.markdown('<div class="rf-subtitle">Quick recipes for busy people</div>', unsafe_allow_html=True)

    with st.form("search_form", clear_on_submit=False):
        col_input, col_button = st.columns([4, 1])
        with col_input:
            st.text_input(
                "Search for recipes by ingredient",
                key=QUERY_INPUT_KEY,
                placeholder="What ingredient do you have? (chicken, tomato, rice...)",
                label_visibility="collapsed",
            )
        with col_button:
            st.form_submit_button("Find Recipes", on_click=_on_submit, use_container_width=True, type="primary")
    st.caption("Tip: separate ingredients with commas to find recipes that use all of them.")


def render_welcome() -> None:
    show_empty_state(
        "Welcome!",
        "Enter an ingredient you have to find delicious recipes quickly.",
    )
    suggestions = get_suggestions()
    if not suggestions:
        return
    cols = st.columns(len(suggestions))
    for col, ingredient in zip(cols, suggestions):
        with col:
            st.button(
                ingredient,
                key=f"suggestion_{ingredient}",
                on_click=_on_suggestion,
                args=(ingredient,),
                use_container_width=True,
            )


def render_search_error(state: FinderState) -> None:
    error = state.search_error
    show_error(error.message, kind=error.kind)
    st.button("Try Another Ingredient", on_click=_on_search_again, key="retry_button")


def render_results(state: FinderState) -> None:
    col_title, col_action = st.columns([4, 1])
    with col_title:
        st.markdown(f"## {state.results_title()}")
    with col_action:
        st.button("New Search", on_click=_on_search_again, key="new_search_button", use_container_width=True)

    for row_start in range(0, len(state.recipes), GRID_COLUMNS):
        cols = st.columns(GRID_COLUMNS)
        for col, recipe in zip(cols, state.recipes[row_start:row_start + GRID_COLUMNS]):
            with col:
                render_recipe_card(recipe)


def render_recipe_card(recipe: RecipeSummary) -> None:
    with st.container(border=True):
        if recipe.thumbnail:
            st.image(recipe.thumbnail, use_container_width=True)
        st.markdown(f'<div class="rf-card-title">{html.escape(recipe.name)}</div>', unsafe_allow_html=True)
        st.button(
            "View Recipe →",
            key=f"view_{recipe.id}",
            on_click=open_recipe,
            args=(recipe,),
            use_container_width=True,
        )


def render_detail(state: FinderState) -> None:
    selected = state.selected
    with st.container(border=True):
        col_title, col_close = st.columns([5, 1])
        with col_title:
            st.markdown(f"## {selected.name}")
        with col_close:
            st.button("✕ Close", on_click=close_recipe, key="close_detail_button", use_container_width=True)

        if state.detail_error is not None:
            show_error(state.detail_error.message, kind=state.detail_error.kind)
            st.button("Try again", on_click=open_recipe, args=(selected,), key="retry_detail_button")
            return

        if state.detail is None:
            st.caption("Recipe details are not available.")
            return

        render_detail_body(state.detail)


def render_detail_body(detail: RecipeDetail) -> None:
    pills = [value for value in (detail.category, detail.area) if value] + detail.tags
    if pills:
        st.markdown(" ".join(pill_tag(p) for p in pills), unsafe_allow_html=True)

    col_image, col_ingredients = st.columns([2, 3])
    with col_image:
        if detail.thumbnail:
            st.image(detail.thumbnail, use_container_width=True)
    with col_ingredients:
        st.markdown("### Ingredients")
        ingredients = extract_ingredients(detail)
        if ingredients:
            for line in ingredients:
                measure = f' <span class="rf-measure">{html.escape(line.measure)}</span>' if line.measure else ""
                st.markdown(f"- **{html.escape(line.name)}**{measure}", unsafe_allow_html=True)
        else:
            st.caption("No ingredients listed.")

    st.markdown("### Instructions")
    steps = format_instructions(detail.instructions)
    if steps:
        for number, step in enumerate(steps, start=1):
            st.markdown(f"{number}. {step}")
    else:
        st.caption("No instructions available.")

    if detail.youtube_url:
        st.link_button("▶ Watch on YouTube", detail.youtube_url)
    if detail.source_url:
        st.caption(f"Source: {detail.source_url}")


def main() -> None:
    state = get_finder_state()

    with st.sidebar:
        st.markdown("### 🍳 **Recipe Finder**")
        if get_health_status():
            st.success("🟢 Backend online")
        else:
            st.error("🔴 Backend offline / unreachable")

    render_header()

    if state.selected is not None:
        render_detail(state)

    if state.search_error is not None:
        render_search_error(state)
    elif state.recipes:
        render_results(state)
    elif not state.has_searched:
        render_welcome()


main()
