"""CLI entry point: python -m mfparser [FILE] [options]"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from mfparser.extractors.tree import DepthLimitError
from mfparser.options import ConfigurationError, load_options_file, resolve_options
from mfparser.query import count, get

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mfparser",
        description=(
            "Extract microformats (v1 and v2) from an HTML file or stdin.\n"
            "Prints the microformats2 JSON document, or occurrence counts."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?", default="-", metavar="FILE",
                        help="HTML file to parse, or '-' for stdin (default: -)")
    parser.add_argument("--base-url", default=None, metavar="URL",
                        help="Base URL for relative links when the page declares none")
    parser.add_argument("--filters", default=None, metavar="TYPES",
                        help="Comma-separated root types to keep (e.g. 'h-card,h-entry')")
    parser.add_argument("--overlapping-versions", action="store_true", default=None,
                        help="Merge v1 and v2 markup on the same element into one item")
    parser.add_argument("--all-implied", action="store_true", default=None,
                        help="Imply name/photo/url for v1-only items too")
    parser.add_argument("--parse-geo", action="store_true", default=None,
                        help="Split geo values into numeric latitude/longitude")
    parser.add_argument("--date-format", default=None, choices=["raw", "normalized"],
                        metavar="{raw,normalized}",
                        help="Datetime output (default: raw)")
    parser.add_argument("--text-format", default=None, choices=["normalized", "trimmed"],
                        metavar="{normalized,trimmed}",
                        help="Plain text output (default: normalized)")
    parser.add_argument("--max-depth", type=int, default=None, metavar="N",
                        help="Maximum element nesting depth (1-320, default: 256)")
    parser.add_argument("--profile", default=None, metavar="PATH",
                        help="YAML file with option defaults")
    parser.add_argument("--profile-name", default=None, metavar="NAME",
                        help="Named profile inside --profile to apply over its defaults")
    parser.add_argument("--count", action="store_true", default=False,
                        help="Print type/property occurrence counts instead of items")
    parser.add_argument("--indent", type=int, default=2, metavar="N",
                        help="JSON indentation (default: 2)")
    parser.add_argument("--pretty", action="store_true", default=False,
                        help="Syntax-highlighted output via Rich")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _collect_options(args: argparse.Namespace) -> dict[str, Any]:
    """Merge the profile file (if any) with flags given on the command line."""
    options: dict[str, Any] = {}
    if args.profile:
        options.update(load_options_file(args.profile, args.profile_name))
    elif args.profile_name:
        raise ConfigurationError("--profile-name requires --profile")

    flags = {
        "baseUrl": args.base_url,
        "filters": args.filters,
        "overlappingVersions": args.overlapping_versions,
        "parseLatLonGeo": args.parse_geo,
        "dateFormat": args.date_format,
        "textFormat": args.text_format,
        "maxDepth": args.max_depth,
    }
    if args.all_implied:
        flags["impliedPropertiesByVersion"] = False
    options.update({key: val for key, val in flags.items() if val is not None})
    return options


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="replace")


def _print_json(data: Any, indent: int, pretty: bool) -> None:
    text = json.dumps(data, indent=indent or None, ensure_ascii=False)
    if not pretty:
        print(text)
        return
    try:
        from rich.console import Console
        from rich.syntax import Syntax

        Console().print(Syntax(text, "json", word_wrap=True))
    except ImportError:
        print(text)


def _print_counts(counts: dict[str, int], indent: int, pretty: bool) -> None:
    if not pretty:
        _print_json(counts, indent, pretty=False)
        return
    try:
        from rich import box
        from rich.console import Console
        from rich.table import Table
    except ImportError:
        _print_json(counts, indent, pretty=False)
        return

    tbl = Table(
        title=f"[bold cyan]Microformat Counts ({len(counts)})[/bold cyan]",
        box=box.SIMPLE_HEAVY,
        show_lines=False,
    )
    tbl.add_column("Name",  style="cyan", no_wrap=True)
    tbl.add_column("Count", justify="right", style="green", width=7, no_wrap=True)
    for name, n in counts.items():
        tbl.add_row(name, str(n))
    Console().print(tbl)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = resolve_options(_collect_options(args))
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: Could not read profile: {exc}", file=sys.stderr)
        return 1

    try:
        html = _read_input(args.file)
    except OSError as exc:
        print(f"ERROR: Could not read {args.file}: {exc}", file=sys.stderr)
        return 1

    logger.info("Parsing %s (%d chars)", args.file, len(html))
    try:
        if args.count:
            _print_counts(count(html, options), args.indent, args.pretty)
        else:
            _print_json(get(html, options).to_dict(), args.indent, args.pretty)
    except DepthLimitError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
