#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/cli.py
"""Command-line interface.

Examples
--------
Render a Markdown file to PDF next to it::

    mdlayout notes.md

Print the assembled element tree instead::

    mdlayout notes.md --dump

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from mdlayout import __version__
from mdlayout.exceptions import (
    DependencyError,
    MdLayoutError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from mdlayout.logging_utils import configure_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdlayout",
        description="Lay out Markdown documents as PDF through an abstract element tree.",
    )
    parser.add_argument("input", help="Markdown file to convert ('-' reads stdin)")
    parser.add_argument("--out", "-o", help="Output PDF path (default: input path with a .pdf suffix)")
    parser.add_argument("--dump", action="store_true", help="Print the element tree instead of writing a PDF")
    parser.add_argument("--config", help="Configuration file (JSON, TOML, YAML or pyproject.toml)")
    parser.add_argument("--no-config", action="store_true", help="Ignore discovered configuration files")
    parser.add_argument("--highlight-style", help="Pygments style used for code blocks")
    parser.add_argument("--page-size", choices=["letter", "a4", "legal"], help="PDF page size")
    parser.add_argument("--no-diagrams", action="store_true", help="Highlight diagram blocks instead of drawing them")
    parser.add_argument("--plugins", action="store_true", help="Load content transforms from installed plugins")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Trace every processed node (implies DEBUG)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level.upper())
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(parsed_args: argparse.Namespace) -> bytes:
    if parsed_args.input == "-":
        return sys.stdin.buffer.read()
    return Path(parsed_args.input).read_bytes()


def _run(parsed_args: argparse.Namespace) -> int:
    from mdlayout.api import build_styles, to_elements, to_pdf
    from mdlayout.config import (
        apply_style_config,
        conversion_options_from_config,
        load_config_with_priority,
        pdf_options_from_config,
    )
    from mdlayout.elements import describe

    config = {} if parsed_args.no_config and not parsed_args.config else load_config_with_priority(parsed_args.config)

    options = conversion_options_from_config(config)
    if parsed_args.highlight_style:
        options = options.create_updated(highlight_style=parsed_args.highlight_style)
    if parsed_args.no_diagrams:
        options = options.create_updated(enable_diagrams=False)
    if parsed_args.plugins:
        options = options.create_updated(discover_plugins=True)

    pdf_options = pdf_options_from_config(config)
    if parsed_args.page_size:
        pdf_options = pdf_options.create_updated(page_size=parsed_args.page_size)

    styles = apply_style_config(build_styles(options), config)
    source = _read_input(parsed_args)

    if parsed_args.dump:
        print(describe(to_elements(source, options=options, styles=styles)))
        return EXIT_SUCCESS

    if parsed_args.out:
        output = Path(parsed_args.out)
    elif parsed_args.input != "-":
        output = Path(parsed_args.input).with_suffix(".pdf")
    else:
        print("Error: --out is required when reading from stdin", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    to_pdf(source, output, options=options, styles=styles, pdf_options=pdf_options)
    logger.info(f"Wrote {output}")
    return EXIT_SUCCESS


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        return _run(parsed_args)
    except (MdLayoutError, OSError, ValueError) as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
