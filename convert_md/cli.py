"""
Command line entry point: ``convert-md [html|pdf|both] [input.md] [output]``.

MIT License - Copyright (c) 2025 Markdown to PDF Converter
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from colorama import Fore, Style

from . import __version__
from .config import Config
from .console import set_debug
from .dependencies import check_dependencies
from .errors import ConvertError, InputNotFoundError
from .renderer import convert_to_html

DEFAULT_INPUT = "CODE_SUMMARY.md"
FORMATS = ("html", "pdf", "both")

USAGE_EXAMPLES = """
Examples:
  convert-md html notes.md notes.html
  convert-md pdf notes.md notes.pdf
  convert-md both notes.md
"""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as ``Error: ...``."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(2, f"{Fore.RED}Error:{Style.RESET_ALL} {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="convert-md",
        description="Convert Markdown files with Mermaid diagrams to HTML and/or PDF",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("format", nargs="?", default="both", choices=FORMATS,
                        help="Output format: html, pdf or both (default: both)")
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT,
                        help=f"Markdown input file (default: {DEFAULT_INPUT})")
    parser.add_argument("output", nargs="?", default=None,
                        help="Output file; only used when a single format is requested "
                             "(default: <input name>.html / <input name>.pdf)")
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s version {__version__}")
    parser.add_argument("--margins", default=None,
                        help="PDF page margins in CSS format (default: '20mm'). Use 1, 2, or 4 values. Units: in, cm, mm, pt, px")
    parser.add_argument("--timeout", type=int, default=None,
                        help="Maximum time in milliseconds to wait for diagrams to render (default: 5000)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging for detailed output")
    return parser


def resolve_outputs(fmt: str, input_file: Path, output: Optional[str]) -> Tuple[Path, Path]:
    """Return the (html, pdf) output paths for a run.

    An explicit output applies only when exactly one format is requested.
    """
    base_name = input_file.stem if input_file.suffix == ".md" else input_file.name
    html_output = Path(output) if output and fmt == "html" else Path(f"{base_name}.html")
    pdf_output = Path(output) if output and fmt == "pdf" else Path(f"{base_name}.pdf")
    return html_output, pdf_output


def run(fmt: str, input_file: Path, output: Optional[str], config: Config) -> None:
    """Run the requested conversions; raises ``ConvertError`` on failure."""
    if not input_file.is_file():
        raise InputNotFoundError(input_file)

    html_output, pdf_output = resolve_outputs(fmt, input_file, output)

    if fmt in ("html", "both"):
        convert_to_html(input_file, html_output, config)

    if fmt in ("pdf", "both"):
        if not check_dependencies():
            raise ConvertError("Missing dependencies for PDF conversion")
        from .pdf import convert_to_pdf
        convert_to_pdf(input_file, pdf_output, config)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.timeout is not None and args.timeout < 0:
        parser.error("--timeout must not be negative")

    config = Config({
        "page_margins": args.margins,
        "render_timeout_ms": args.timeout,
        "debug": True if args.debug else None,
    })
    try:
        config.validate()
        set_debug(config.is_debug())
    except ValueError as e:
        parser.error(str(e))

    try:
        run(args.format, Path(args.input), args.output, config)
    except ConvertError as e:
        print(f"{Fore.RED}Error:{Style.RESET_ALL} {e}", file=sys.stderr)
        sys.exit(1)

    print(f"\n{Fore.GREEN}✓{Style.RESET_ALL} Conversion complete!")


if __name__ == "__main__":
    main()
