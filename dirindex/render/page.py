"""HTML listing page rendering.

Every piece of user-controlled text (entry names, hrefs, stylesheet URL, title)
goes through ``escape_html`` before it is placed in the document.
"""

from __future__ import annotations

from datetime import datetime, timezone

from ..models import DirectoryIndex, FileEntry
from .themes import DEFAULT_THEME, PageTheme, stylesheet_block

DEFAULT_TITLE_TEMPLATE = "Index of {path}"
DIRECTORY_ICON = "\U0001F4C1"
FILE_ICON = "\U0001F4C4"
KIB = 1024
MIB = 1024 * 1024
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)


def escape_html(text: str) -> str:
    """Escape ``&``, ``<``, ``>`` and ``"`` for text and attribute values."""
    for raw, escaped in _HTML_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def format_file_size(size: int | None) -> str:
    """Return a short human-readable size label, ``-`` when unknown."""
    if size is None:
        return "-"
    if size < KIB:
        return f"{size} B"
    if size < MIB:
        return f"{size / KIB:.1f} KB"
    return f"{size / MIB:.1f} MB"


def _parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(timestamp: str | None) -> str:
    """Format an ISO-8601 timestamp as ``Mon D, YYYY`` (UTC), ``-`` when unset."""
    if not timestamp:
        return "-"
    moment = _parse_timestamp(timestamp)
    return f"{MONTH_ABBREVIATIONS[moment.month - 1]} {moment.day}, {moment.year}"


def render_title(title_template: str, path: str) -> str:
    """Substitute the first ``{path}`` placeholder in ``title_template``."""
    return title_template.replace("{path}", path, 1)


def _table_row(icon: str, href: str, label: str, size_cell: str, date_cell: str) -> str:
    return (
        "    <tr>\n"
        f"      <td>{icon}</td>\n"
        f'      <td><a href="{escape_html(href)}">{escape_html(label)}</a></td>\n'
        f'      <td class="size">{size_cell}</td>\n'
        f'      <td class="date">{date_cell}</td>\n'
        "    </tr>"
    )


def _entry_row(entry: FileEntry) -> str:
    if entry.is_dir:
        href = f"{entry.name}/"
        return _table_row(DIRECTORY_ICON, href, href, format_file_size(entry.size), format_date(entry.modified))
    return _table_row(FILE_ICON, entry.name, entry.name, format_file_size(entry.size), format_date(entry.modified))


def render_html(
    index: DirectoryIndex,
    stylesheet: str | None = None,
    title_template: str = DEFAULT_TITLE_TEMPLATE,
    theme: PageTheme | None = None,
) -> str:
    """Render ``index`` as a self-contained HTML document.

    A ``../`` row is prepended for every directory except the scan root. When
    ``stylesheet`` is empty the palette from ``theme`` is embedded instead.
    """
    title = escape_html(render_title(title_template, index.path))
    if stylesheet:
        head_style = f'<link rel="stylesheet" href="{escape_html(stylesheet)}">'
    else:
        head_style = stylesheet_block(theme or DEFAULT_THEME)

    rows: list[str] = []
    if not index.is_root:
        rows.append(_table_row(DIRECTORY_ICON, "../", "../", "-", "-"))
    rows.extend(_entry_row(entry) for entry in index.entries)
    body_rows = "\n".join(rows)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  {head_style}
</head>
<body>
  <h1>{title}</h1>
  <table>
    <thead>
      <tr>
        <th></th>
        <th>Name</th>
        <th>Size</th>
        <th>Modified</th>
      </tr>
    </thead>
    <tbody>
{body_rows}
    </tbody>
  </table>
  <footer>
    <p>Generated {format_date(index.generated)}</p>
  </footer>
</body>
</html>"""


__all__ = [
    "DEFAULT_TITLE_TEMPLATE",
    "escape_html",
    "format_date",
    "format_file_size",
    "render_html",
    "render_title",
]
