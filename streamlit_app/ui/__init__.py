"""
UI Styling and Components Module.

This module provides global CSS styling and feedback components
for the Recipe Finder Streamlit app.
"""

from .styles import load_global_styles, pill_tag
from .feedback import show_error, show_empty_state

__all__ = [
    "load_global_styles",
    "pill_tag",
    "show_error",
    "show_empty_state",
]
