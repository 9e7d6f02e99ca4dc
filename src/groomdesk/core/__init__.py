"""Core domain, backend access and pure helpers.

No Streamlit UI calls.
"""
