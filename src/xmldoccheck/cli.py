"""Command-line entry point.

Checks a solution, project, directory or single file and prints one line
per issue, followed by a coverage summary.

Exit codes:
    0 - no issues
    1 - documentation issues found
    2 - configuration or project could not be loaded
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .checker import run_check
from .config import load_config
from .errors import ConfigError, ProjectLoadError
from .reporters import render_github, render_summary, render_text


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="xmldoccheck",
        description="Report C# declarations with missing or incomplete XML documentation",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="A .sln, .csproj or .cs file, or a directory of C# sources",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file. Defaults to .xmldoccheck.toml next to PATH if present.",
    )
    parser.add_argument(
        "--format",
        choices=("text", "github"),
        default="text",
        help="text: one message per line; github: Actions annotations",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress and the documentation text of each declaration",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the checker and print the report."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.path, args.config)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        report = run_check(args.path, config)
    except ProjectLoadError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.format == "github":
        rendered = render_github(report)
    else:
        rendered = render_text(report, locations=True)

    if rendered:
        print(rendered)
    print(render_summary(report), file=sys.stderr)

    return 1 if len(report) else 0
