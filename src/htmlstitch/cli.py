#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for htmlstitch.

Reads an HTML document, resolves its ``<fragment>`` placeholders and writes
the composed document.

Examples
--------
Compose a file to stdout::

    $ htmlstitch page.html

Read from stdin, write to a file, resolve relative sources::

    $ cat page.html | htmlstitch --base-url https://fragments.local -o out.html

Settings can also come from ``.htmlstitch.toml`` (or ``.yaml``/``.json``, or
``[tool.htmlstitch]`` in ``pyproject.toml``); flags override file values.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from htmlstitch import __version__
from htmlstitch.composer import compose
from htmlstitch.config import discover_config_file, load_config_file, options_from_config
from htmlstitch.constants import (
    EXIT_COMPOSITION_ERROR,
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    HTML_PARSER_CHOICES,
)
from htmlstitch.exceptions import (
    DependencyError,
    ParsingError,
    SectionNotFoundError,
    StitchError,
    ValidationError,
)
from htmlstitch.logging_utils import FallbackCollector, configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``htmlstitch`` command."""
    parser = argparse.ArgumentParser(
        prog="htmlstitch",
        description="Resolve <fragment src=...> placeholders in an HTML document.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Input HTML file, or '-' for stdin (default)")
    parser.add_argument("-o", "--out", dest="output", help="Output file (default: stdout)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help="Configuration file (TOML, YAML, JSON or pyproject.toml)")
    config_group.add_argument(
        "--no-config", action="store_true", help="Do not search for a configuration file automatically"
    )

    compose_group = parser.add_argument_group("composition")
    compose_group.add_argument("--document-parser", choices=HTML_PARSER_CHOICES, help="Parser for the input document")
    compose_group.add_argument("--fragment-parser", choices=HTML_PARSER_CHOICES, help="Parser for fetched fragments")
    compose_group.add_argument("--max-depth", type=int, help="Maximum nesting depth of fragments")
    compose_group.add_argument(
        "--no-hoist-links",
        dest="hoist_links",
        action="store_const",
        const=False,
        help="Leave <link> elements inside fragment content",
    )
    compose_group.add_argument(
        "--lenient-head",
        dest="strict_head",
        action="store_const",
        const=False,
        help="Keep going when a link cannot be hoisted because <head> is missing",
    )

    fetch_group = parser.add_argument_group("fetching")
    fetch_group.add_argument("--timeout", type=float, help="Request timeout in seconds")
    fetch_group.add_argument("--user-agent", help="User-Agent header for fragment requests")
    fetch_group.add_argument("--base-url", help="Base URL for relative fragment sources")
    fetch_group.add_argument(
        "--no-follow-redirects",
        dest="follow_redirects",
        action="store_const",
        const=False,
        help="Do not follow redirects",
    )

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    log_group.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    log_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    log_group.add_argument("--log-file", help="Also write log output to this file")
    log_group.add_argument(
        "--http-log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level for httpx/httpcore (default: WARNING, DEBUG with --trace)",
    )
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> FallbackCollector:
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace or (parsed_args.verbose and parsed_args.log_level == "WARNING"):
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    return configure_logging(
        log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        http_log_level=parsed_args.http_log_level,
    )


def _load_config(parsed_args: argparse.Namespace) -> dict[str, Any]:
    if parsed_args.config:
        return load_config_file(parsed_args.config)
    if parsed_args.no_config:
        return {}

    config_path = discover_config_file()
    if config_path is None:
        return {}
    logger.debug("Using configuration file %s", config_path)
    return load_config_file(config_path)


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _write_output(html: str, path: Optional[str]) -> None:
    if path:
        Path(path).write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)
        sys.stdout.write("\n")


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, DependencyError):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, SectionNotFoundError):
        return EXIT_COMPOSITION_ERROR
    return EXIT_ERROR


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the htmlstitch command.

    Parameters
    ----------
    argv : sequence of str, optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parsed_args = create_parser().parse_args(argv)
    fallbacks = _setup_logging_level(parsed_args)

    try:
        config = _load_config(parsed_args)
        compose_options, fetch_options = options_from_config(
            config,
            compose_overrides={
                "document_parser": parsed_args.document_parser,
                "fragment_parser": parsed_args.fragment_parser,
                "max_depth": parsed_args.max_depth,
                "hoist_links": parsed_args.hoist_links,
                "strict_head": parsed_args.strict_head,
            },
            fetch_overrides={
                "timeout": parsed_args.timeout,
                "user_agent": parsed_args.user_agent,
                "base_url": parsed_args.base_url,
                "follow_redirects": parsed_args.follow_redirects,
            },
        )
        source = _read_input(parsed_args.input)
        html = compose(source, options=compose_options, fetch_options=fetch_options)
        _write_output(html, parsed_args.output)
        if fallbacks.count:
            logger.info(fallbacks.summary())
    except (StitchError, OSError) as e:
        logger.error(str(e))
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS
