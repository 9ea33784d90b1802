"""
Utility modules for the Streamlit frontend.

This package contains:
- api_client: Backend API communication
- state: Finder state kept in st.session_state
"""
