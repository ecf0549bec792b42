"""Page palettes for the embedded listing stylesheet.

The built-in ``default`` palette is a dark theme. Any installed Pygments style
name can also be used; its background, text, and accent colors are mapped onto
the same CSS variables.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import Comment, Keyword, Name, Text
from pygments.util import ClassNotFound

from ..errors import ConfigError

DEFAULT_THEME_NAME = "default"


@dataclass(frozen=True)
class PageTheme:
    """CSS custom-property values used by the embedded stylesheet."""

    name: str
    background: str
    foreground: str
    link: str
    border: str
    muted: str
    faint: str


DEFAULT_THEME = PageTheme(
    name=DEFAULT_THEME_NAME,
    background="#1a1a2e",
    foreground="#eef",
    link="#64b5f6",
    border="#333",
    muted="#888",
    faint="#666",
)


def _token_color(style, token, fallback: str) -> str:
    color = style.style_for_token(token).get("color")
    return f"#{color}" if color else fallback


def theme_from_pygments(style_name: str) -> PageTheme:
    """Build a page palette from the Pygments style called ``style_name``."""
    try:
        style = get_style_by_name(style_name)
    except ClassNotFound as exc:
        raise ConfigError(f"Unknown theme: {style_name!r}") from exc

    background = style.background_color or DEFAULT_THEME.background
    foreground = _token_color(style, Text, DEFAULT_THEME.foreground)
    muted = _token_color(style, Comment, DEFAULT_THEME.muted)
    link = _token_color(style, Name.Function, "")
    if not link:
        link = _token_color(style, Keyword, DEFAULT_THEME.link)
    return PageTheme(
        name=style_name,
        background=background,
        foreground=foreground,
        link=link,
        border=style.highlight_color or DEFAULT_THEME.border,
        muted=muted,
        faint=muted,
    )


def available_theme_names() -> list[str]:
    """Return selectable theme names, built-in first."""
    return [DEFAULT_THEME_NAME, *sorted(name for name in get_all_styles() if name != DEFAULT_THEME_NAME)]


def get_theme(name: str | None) -> PageTheme:
    """Resolve ``name`` to a palette; ``None``/empty selects the built-in theme."""
    if not name or name == DEFAULT_THEME_NAME:
        return DEFAULT_THEME
    return theme_from_pygments(name)


def stylesheet_block(theme: PageTheme) -> str:
    """Return the embedded ``<style>`` element for ``theme``."""
    return f"""<style>
    :root {{
      --bg: {theme.background};
      --fg: {theme.foreground};
      --link: {theme.link};
      --border: {theme.border};
      --muted: {theme.muted};
      --faint: {theme.faint};
    }}
    body {{
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, monospace;
      background: var(--bg);
      color: var(--fg);
      max-width: 900px;
      margin: 2rem auto;
      padding: 0 1rem;
    }}
    h1 {{ border-bottom: 1px solid var(--border); padding-bottom: 0.5rem; }}
    table {{ width: 100%; border-collapse: collapse; }}
    th, td {{ text-align: left; padding: 0.5rem; border-bottom: 1px solid var(--border); }}
    th:first-child, td:first-child {{ width: 2rem; text-align: center; }}
    .size, .date {{ text-align: right; color: var(--muted); font-size: 0.9rem; }}
    a {{ color: var(--link); text-decoration: none; }}
    a:hover {{ text-decoration: underline; }}
    footer {{ margin-top: 2rem; color: var(--faint); font-size: 0.8rem; }}
  </style>"""


__all__ = [
    "DEFAULT_THEME",
    "DEFAULT_THEME_NAME",
    "PageTheme",
    "available_theme_names",
    "get_theme",
    "stylesheet_block",
    "theme_from_pygments",
]
