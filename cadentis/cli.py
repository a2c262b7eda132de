"""Command line entry point for scanning verse and classifying rhymes."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, TextIO

from cadentis.app.app import CadentisApp
from cadentis.utils.logging_config import LOG_LEVEL_ENV, configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Scan Hungarian verse: syllable weights, verse forms, elegiac "
            "couplets and rhyme schemes."
        )
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Verse to analyse; separate lines with newlines. Reads stdin when omitted.",
    )
    parser.add_argument(
        "--file",
        type=Path,
        help="Read the verse from a UTF-8 text file instead.",
    )
    parser.add_argument(
        "--rhyme",
        nargs=2,
        metavar=("FIRST", "SECOND"),
        help="Classify the rhyme between two words instead of scanning verse.",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help="Worker threads for per-line analysis (defaults to CADENTIS_MAX_WORKERS).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of formatted text.",
    )
    parser.add_argument(
        "--pretty-json",
        action="store_true",
        help="Indent JSON output for readability (implies --json).",
    )
    parser.add_argument(
        "--show-telemetry",
        action="store_true",
        help="Print the telemetry snapshot of the last request to stderr.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (defaults to CADENTIS_LOG_LEVEL, then WARNING).",
    )
    return parser


def _read_source(args: argparse.Namespace, stdin: TextIO) -> str:
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    if args.text is not None:
        return args.text
    return stdin.read()


def _dump(payload: Dict[str, Any], pretty: bool, stdout: TextIO) -> None:
    json.dump(payload, stdout, indent=2 if pretty else None, ensure_ascii=False, sort_keys=True)
    stdout.write("\n")


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or os.environ.get(LOG_LEVEL_ENV) or "WARNING")

    app = CadentisApp(max_workers=args.max_workers)
    as_json = args.json or args.pretty_json

    if args.rhyme:
        first, second = args.rhyme
        rhyme = app.classify_rhyme_type(first, second)
        if as_json:
            _dump(app.formatter.rhyme_type_as_dict(first, second, rhyme), args.pretty_json, stdout)
        else:
            stdout.write(app.formatter.format_rhyme_type(first, second, rhyme) + "\n")
    else:
        try:
            source = _read_source(args, stdin)
        except OSError as exc:
            parser.error(f"cannot read {args.file}: {exc}")
        if as_json:
            _dump(app.render_payload(source), args.pretty_json, stdout)
        else:
            stdout.write(app.render_report(source) + "\n")

    if args.show_telemetry:
        _dump(app.get_latest_telemetry(), True, stderr)
    return 0


__all__ = ["main"]
