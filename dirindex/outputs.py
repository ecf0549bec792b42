"""Run outputs reported back to the caller.

Inside a GitHub Actions job, outputs are appended to the file named by
``$GITHUB_OUTPUT`` and failures are emitted as ``::error::`` annotations.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

from .config import RunOptions
from .models import INDEX_JSON, ScanResult


def collect_outputs(result: ScanResult, options: RunOptions) -> dict[str, str]:
    """Build the ordered output mapping for a finished scan.

    ``manifest-path`` is reported only when a root manifest was written.
    """
    outputs = {
        "generated-count": str(result.stats.generated_count),
        "directories-scanned": str(result.stats.directories_scanned),
    }
    if options.output_format.wants_json and result.root_index is not None:
        outputs["manifest-path"] = os.path.normpath(os.path.join(str(options.root), INDEX_JSON))
    return outputs


def format_outputs(outputs: Mapping[str, str]) -> str:
    return "".join(f"{name}={value}\n" for name, value in outputs.items())


def write_github_outputs(
    outputs: Mapping[str, str],
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Append outputs to ``$GITHUB_OUTPUT`` when set; return the file written."""
    env = os.environ if environ is None else environ
    target = env.get("GITHUB_OUTPUT")
    if not target:
        return None
    path = Path(target)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(format_outputs(outputs))
    return path


def summary_line(result: ScanResult) -> str:
    stats = result.stats
    return f"Generated {stats.generated_count} index files across {stats.directories_scanned} directories"


def report_failure(
    message: str,
    environ: Mapping[str, str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Report a terminal failure once, as an annotation when running in Actions."""
    env = os.environ if environ is None else environ
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    if env.get("GITHUB_ACTIONS") == "true":
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        out.write(f"::error::{escaped}\n")
    err.write(f"Error: {message}\n")


__all__ = [
    "collect_outputs",
    "format_outputs",
    "report_failure",
    "summary_line",
    "write_github_outputs",
]
