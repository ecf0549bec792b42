"""Run option resolution.

Options come from, in order of precedence: command-line flags, ``INPUT_*``
environment variables (as set by a GitHub Actions runner), the persisted JSON
config file, and built-in defaults. Loading the config file is defensive:
a missing or malformed file behaves like an empty one.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError
from .filtering import IgnoreFilter
from .render.formats import OutputFormat
from .render.page import DEFAULT_TITLE_TEMPLATE
from .render.themes import DEFAULT_THEME_NAME, get_theme
from .walk import ScanOptions

APP_NAME = "dirindex"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

INPUT_NAMES = (
    "root",
    "output-format",
    "stylesheet",
    "ignore",
    "include-metadata",
    "title-template",
    "theme",
)
DEFAULTS: dict[str, str] = {
    "root": ".",
    "output-format": OutputFormat.BOTH.value,
    "stylesheet": "",
    "ignore": "",
    "include-metadata": "true",
    "title-template": DEFAULT_TITLE_TEMPLATE,
    "theme": DEFAULT_THEME_NAME,
}

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so a read-only config
    directory never breaks a scan.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _config_value(config: Mapping[str, object], name: str) -> str | None:
    """Coerce a persisted config value to the string form inputs use."""
    value = config.get(name)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return "\n".join(value)
    return None


def env_input(name: str, environ: Mapping[str, str] | None = None) -> str | None:
    """Return the ``INPUT_<NAME>`` value for an action input, or ``None`` when unset/blank."""
    env = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    for candidate in (key, key.replace("-", "_")):
        value = env.get(candidate)
        if value is not None and value.strip():
            return value.strip()
    return None


def parse_bool(value: str | bool, name: str) -> bool:
    """Parse a boolean option value, raising ``ConfigError`` when unrecognized."""
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


@dataclass(frozen=True)
class RunOptions:
    """Fully resolved options for one run."""

    root: Path
    output_format: OutputFormat = OutputFormat.BOTH
    stylesheet: str | None = None
    ignore_patterns: tuple[str, ...] = ()
    include_metadata: bool = True
    title_template: str = DEFAULT_TITLE_TEMPLATE
    theme_name: str = DEFAULT_THEME_NAME

    def scan_options(self) -> ScanOptions:
        return ScanOptions(
            ignore=IgnoreFilter(self.ignore_patterns),
            output_format=self.output_format,
            stylesheet=self.stylesheet or None,
            include_metadata=self.include_metadata,
            title_template=self.title_template,
            theme=get_theme(self.theme_name),
        )


def resolve_options(
    cli_values: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
    config: Mapping[str, object] | None = None,
) -> RunOptions:
    """Merge CLI values, environment inputs, persisted config, and defaults.

    ``cli_values`` maps input names (e.g. ``"output-format"``) to values;
    ``None`` means "not given on the command line".
    """
    cli_values = cli_values or {}
    persisted = load_config() if config is None else config

    raw: dict[str, object] = {}
    for name in INPUT_NAMES:
        value = cli_values.get(name)
        if value is None:
            value = env_input(name, environ)
        if value is None:
            value = _config_value(persisted, name)
        if value is None:
            value = DEFAULTS[name]
        raw[name] = value

    ignore_raw = raw["ignore"]
    if isinstance(ignore_raw, (list, tuple)):
        ignore = IgnoreFilter.from_patterns(str(item) for item in ignore_raw)
    else:
        ignore = IgnoreFilter.from_text(str(ignore_raw))

    title_template = str(raw["title-template"]) or DEFAULT_TITLE_TEMPLATE
    stylesheet = str(raw["stylesheet"]).strip()

    return RunOptions(
        root=Path(str(raw["root"]) or "."),
        output_format=OutputFormat.parse(str(raw["output-format"])),
        stylesheet=stylesheet or None,
        ignore_patterns=ignore.patterns,
        include_metadata=parse_bool(raw["include-metadata"], "include-metadata"),
        title_template=title_template,
        theme_name=str(raw["theme"]).strip() or DEFAULT_THEME_NAME,
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULTS",
    "INPUT_NAMES",
    "RunOptions",
    "env_input",
    "load_config",
    "parse_bool",
    "resolve_options",
    "save_config",
]
