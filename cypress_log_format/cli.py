"""
CLI wrapper for cypress_log_format.

We keep CLI glue in its own module so the annotator (`engine.py`) and the
converter (`ansi_html.py`) stay free of I/O.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from . import render
from .styles import GREEN, RED, paint
from .exceptions import FetchError
from .fetch import fetch_remote_text

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="cypress-log-format",
        description="Cypress Console Formatter: colorize Cypress / test-runner output.",
        epilog="Examples:\n"
               "  %(prog)s test-output.txt                  # Display formatted output\n"
               "  %(prog)s test-output.txt formatted.txt    # Save formatted output\n"
               "  cat test-output.txt | %(prog)s            # Pipe input\n"
               "  %(prog)s test-output.txt --page           # Standalone HTML page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )


def _add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input_file", nargs="?", default=None, help="Log file to format (default: stdin).")
    parser.add_argument("output_file", nargs="?", default=None, help="Write the result here instead of stdout.")
    parser.add_argument("--html", action="store_true", help="Emit HTML spans instead of terminal colors.")
    parser.add_argument("--page", action="store_true", help="Emit a standalone HTML page (implies --html).")
    parser.add_argument("--url", default=None, help="Read the log from a URL instead of a file/stdin.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")


def _format(text: str, *, as_html: bool, as_page: bool) -> str:
    if not (as_html or as_page):
        return render.format_text(text, "terminal")
    out = render.format_text(text, "html")
    if as_page:
        return render.render_page(out, interactive=False)
    return out


def _cli(argv: Optional[Sequence[str]] = None, *, stdin: Optional[TextIO] = None) -> int:
    parser = _build_parser()
    _add_arguments(parser)
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")
    stdin = stdin if stdin is not None else sys.stdin

    output_path: Optional[Path] = None
    try:
        if args.url:
            if args.output_file is not None:
                logger.error(paint("Error: Too many arguments", RED))
                parser.print_help()
                return 1
            text = fetch_remote_text(args.url)
            output_path = Path(args.input_file).expanduser() if args.input_file else None
        elif args.input_file is not None:
            text = Path(args.input_file).expanduser().read_text(encoding="utf-8")
            output_path = Path(args.output_file).expanduser() if args.output_file else None
        elif stdin.isatty():
            parser.print_help()
            return 0
        else:
            text = stdin.read()

        formatted = _format(text, as_html=bool(args.html), as_page=bool(args.page))

        if output_path is not None:
            output_path.write_text(formatted, encoding="utf-8")
            logger.info(paint(f"✓ Formatted output saved to: {output_path}", GREEN))
        else:
            sys.stdout.write(formatted + ("\n" if not formatted.endswith("\n") else ""))
    except (OSError, UnicodeDecodeError) as e:
        logger.error(paint(f"Error processing file: {e}", RED))
        return 1
    except FetchError as e:
        logger.error(paint(f"Error fetching {e.url or 'URL'}: {e}", RED))
        return 1
    return 0


def main() -> int:
    return _cli()
