"""UI pages module."""
from .upload_page import render as render_upload_page
from .dashboard_page import render as render_dashboard_page

__all__ = ["render_upload_page", "render_dashboard_page"]
