"""
Global CSS Styling for the Recipe Finder.

This module provides load_global_styles() to inject consistent styling:
typography, the results grid cards, and the detail panel.
"""

import html

import streamlit as st


def load_global_styles() -> None:
    """
    Inject global CSS styles for the Recipe Finder app.

    This function:
    - Imports Google Fonts (Nunito) for friendly typography
    - Gives recipe cards rounded images and a fixed title height so grid rows line up
    - Styles ingredient measures and the tag pills in the detail panel
    """
    css = """
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Nunito:wght@400;600;700&display=swap');

        html, body, [class*="css"] {
            font-family: 'Nunito', 'sans serif' !important;
        }

        h1, h2, h3, h4, h5, h6 {
            font-weight: 600 !important;
            letter-spacing: 0.02em !important;
        }

        .block-container {
            max-width: 1200px;
        }

        .rf-subtitle {
            color: #6b7280;
            font-size: 1.1rem;
            margin-top: -0.75rem;
            margin-bottom: 1.5rem;
        }

        [data-testid="stImage"] img {
            border-radius: 12px;
        }

        .rf-card-title {
            font-weight: 600;
            min-height: 3rem;
            margin: 0.5rem 0;
        }

        .rf-measure {
            color: #6b7280;
        }

        .rf-pill {
            display: inline-block;
            background: #fef3c7;
            color: #92400e;
            border-radius: 999px;
            padding: 0.15rem 0.7rem;
            margin-right: 0.35rem;
            font-size: 0.85rem;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)


def pill_tag(text: str) -> str:
    """
    Build the HTML for a small tag pill (category, cuisine, tags).

    Args:
        text: Pill label (escaped here)

    Returns:
        HTML string to pass to st.markdown(..., unsafe_allow_html=True)
    """
    return f'<span class="rf-pill">{html.escape(text)}</span>'
