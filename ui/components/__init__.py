"""UI components module."""
from .upload_form import render_upload_form
from .file_list import render_file_list
from .filter_bar import render_filter_bar
from .analytics_view import render as render_analytics_view
from .export_panel import render_export_panel
from .sidebar import render_sidebar

__all__ = [
    "render_upload_form",
    "render_file_list",
    "render_filter_bar",
    "render_analytics_view",
    "render_export_panel",
    "render_sidebar",
]
