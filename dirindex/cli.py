"""Command-line front door for dirindex.

Resolves run options, scans the tree, and reports outputs. This is the single
place where failures are caught: any configuration or filesystem error aborts
the run with one failure message and exit status 1.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

import structlog

from .config import INPUT_NAMES, RunOptions, load_config, resolve_options, save_config
from .errors import DirIndexError
from .log import configure_logging
from .models import ScanResult
from .outputs import collect_outputs, format_outputs, report_failure, summary_line, write_github_outputs
from .render.formats import OutputFormat
from .render.themes import available_theme_names
from .walk import scan_tree

logger = structlog.get_logger("dirindex.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirindex",
        description="Write index.html / index.json directory listings into every directory of a tree.",
    )
    parser.add_argument("root", nargs="?", default=None, help="Directory to scan. Defaults to the current directory.")
    parser.add_argument(
        "--output-format",
        choices=[member.value for member in OutputFormat],
        default=None,
        help="Artifacts to write per directory (default: both).",
    )
    parser.add_argument("--stylesheet", default=None, help="External stylesheet URL linked from every page.")
    parser.add_argument(
        "--ignore",
        action="append",
        default=None,
        metavar="PATTERNS",
        help="Glob patterns to exclude (comma/newline separated; repeatable).",
    )
    metadata = parser.add_mutually_exclusive_group()
    metadata.add_argument(
        "--include-metadata",
        dest="include_metadata",
        action="store_const",
        const=True,
        default=None,
        help="Record file size and modification time (default).",
    )
    metadata.add_argument(
        "--no-metadata",
        dest="include_metadata",
        action="store_const",
        const=False,
        help="Omit file size and modification time.",
    )
    parser.add_argument("--title-template", default=None, help="Page title; '{path}' is replaced by the listing path.")
    parser.add_argument("--theme", default=None, help="Embedded page theme: 'default' or a Pygments style name.")
    parser.add_argument("--list-themes", action="store_true", help="Print available theme names and exit.")
    parser.add_argument("--print-outputs", action="store_true", help="Print name=value outputs after the scan.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist the given options as defaults for later runs and exit.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def cli_values(args: argparse.Namespace) -> dict[str, object]:
    """Map parsed arguments to input names; unset flags map to ``None``."""
    ignore = "\n".join(args.ignore) if args.ignore else None
    return {
        "root": args.root,
        "output-format": args.output_format,
        "stylesheet": args.stylesheet,
        "ignore": ignore,
        "include-metadata": args.include_metadata,
        "title-template": args.title_template,
        "theme": args.theme,
    }


def save_defaults(values: dict[str, object]) -> dict[str, object]:
    """Merge explicitly given values into the persisted config."""
    config = load_config()
    for name in INPUT_NAMES:
        value = values.get(name)
        if value is not None:
            config[name] = value
    save_config(config)
    return config


def run(options: RunOptions) -> ScanResult:
    """Scan ``options.root`` and write listings; errors propagate to the caller."""
    return scan_tree(options.root, options.scan_options())


def main(argv: Sequence[str] | None = None) -> None:
    """Parse CLI arguments, generate listings, and report outputs.

    Exits with status 1 after reporting a single failure message when the
    root is missing, an option is invalid, or the filesystem raises.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.list_themes:
        sys.stdout.write("\n".join(available_theme_names()) + "\n")
        return

    values = cli_values(args)
    if args.save_defaults:
        save_defaults(values)
        return

    try:
        options = resolve_options(values)
        result = run(options)
        outputs = collect_outputs(result, options)
        write_github_outputs(outputs)
    except (DirIndexError, OSError, UnicodeError) as exc:
        logger.error("dirindex.failed", error=str(exc))
        report_failure(str(exc))
        raise SystemExit(1) from exc

    sys.stdout.write(summary_line(result) + "\n")
    if args.print_outputs:
        sys.stdout.write(format_outputs(outputs))


if __name__ == "__main__":
    main()
