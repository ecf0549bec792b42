"""Output-format selection and per-listing rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import ConfigError
from ..models import DirectoryIndex
from .manifest import render_json
from .page import DEFAULT_TITLE_TEMPLATE, render_html
from .themes import PageTheme


class OutputFormat(str, Enum):
    """Which artifacts are written into each scanned directory."""

    HTML = "html"
    JSON = "json"
    BOTH = "both"

    @property
    def wants_html(self) -> bool:
        return self in (OutputFormat.HTML, OutputFormat.BOTH)

    @property
    def wants_json(self) -> bool:
        return self in (OutputFormat.JSON, OutputFormat.BOTH)

    @classmethod
    def parse(cls, value: str | None) -> OutputFormat:
        """Parse a user-supplied format name; empty selects ``both``."""
        if value is None or not value.strip():
            return cls.BOTH
        normalized = value.strip().lower()
        try:
            return cls(normalized)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ConfigError(f"Invalid output format {value!r} (expected one of: {choices})") from exc


@dataclass(frozen=True)
class RenderedIndex:
    """Rendered artifacts for one listing; unrequested formats are ``None``."""

    html: str | None = None
    json: str | None = None


def render_index(
    index: DirectoryIndex,
    output_format: OutputFormat = OutputFormat.BOTH,
    stylesheet: str | None = None,
    title_template: str = DEFAULT_TITLE_TEMPLATE,
    theme: PageTheme | None = None,
) -> RenderedIndex:
    """Render ``index`` into every format requested by ``output_format``."""
    html_text = render_html(index, stylesheet, title_template, theme) if output_format.wants_html else None
    json_text = render_json(index) if output_format.wants_json else None
    return RenderedIndex(html=html_text, json=json_text)


__all__ = ["OutputFormat", "RenderedIndex", "render_index"]
