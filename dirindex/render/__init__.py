"""Rendering of directory listings into HTML pages and JSON manifests.

This package contains:
- output-format selection
- the HTML page renderer and its formatting helpers
- JSON manifest serialization
- page palettes (built-in dark theme or a Pygments style)
"""

from __future__ import annotations

from .formats import OutputFormat, RenderedIndex, render_index
from .manifest import load_index, render_json
from .page import (
    DEFAULT_TITLE_TEMPLATE,
    escape_html,
    format_date,
    format_file_size,
    render_html,
    render_title,
)
from .themes import DEFAULT_THEME, PageTheme, available_theme_names, get_theme

__all__ = [
    "DEFAULT_THEME",
    "DEFAULT_TITLE_TEMPLATE",
    "OutputFormat",
    "PageTheme",
    "RenderedIndex",
    "available_theme_names",
    "escape_html",
    "format_date",
    "format_file_size",
    "get_theme",
    "load_index",
    "render_html",
    "render_index",
    "render_json",
    "render_title",
]
