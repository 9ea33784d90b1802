"""
Standardized feedback utilities for error and empty states.

Provides reusable components for displaying error banners and the welcome
state in a consistent manner.
"""

from typing import Optional

import streamlit as st

# Banner titles per error kind
ERROR_TITLES = {
    "no_results": "No recipes found",
    "connectivity": "Connection problem",
    "unexpected": "Something went wrong",
    "not_found": "Recipe not found",
}


def show_error(message: str, kind: Optional[str] = None) -> None:
    """
    Display a standardized error banner.

    Args:
        message: Main error message to display
        kind: Optional error kind, used to pick a title
    """
    title = ERROR_TITLES.get(kind or "", "")
    if title:
        st.error(f"😕 **{title}**\n\n{message}")
    else:
        st.error(f"😕 {message}")


def show_empty_state(title: str, subtitle: Optional[str] = None) -> None:
    """
    Display a standardized empty/welcome state.

    Args:
        title: Main title
        subtitle: Optional subtitle/description text
    """
    st.info(f"👨‍🍳 **{title}**")
    if subtitle:
        st.caption(subtitle)

