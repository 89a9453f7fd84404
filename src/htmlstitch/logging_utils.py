#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlstitch/logging_utils.py
"""Logging setup for the htmlstitch command line.

Composition output is made of two kinds of log traffic that need different
verbosity: htmlstitch's own records (which placeholders fell back and why,
what was hoisted) and the HTTP stack's per-request and per-connection
records. ``configure_logging`` levels them separately, so ``--verbose`` shows
composition detail without every ``httpcore`` connection event; ``--trace``
or an explicit ``http_log_level`` opens up the HTTP loggers as well.

It also attaches a ``FallbackCollector`` to the package logger. The composer
tags every fallback warning with the placeholder's source, which lets the CLI
report which sources were unavailable once a document is written.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from htmlstitch.constants import FALLBACK_URL_LOG_FIELD, HTTP_LOGGERS, PACKAGE_LOGGER


class FallbackCollector(logging.Handler):
    """Record the sources of placeholders that rendered fallback content.

    Only records tagged with a ``fragment_url`` attribute are collected;
    everything else passes through untouched.
    """

    def __init__(self) -> None:
        """Initialize an empty collector accepting records of any level."""
        super().__init__(logging.NOTSET)
        self.sources: list[str] = []

    @property
    def count(self) -> int:
        return len(self.sources)

    def emit(self, record: logging.LogRecord) -> None:
        source = getattr(record, FALLBACK_URL_LOG_FIELD, None)
        if source is not None:
            self.sources.append(source)

    def summary(self) -> str:
        """Describe the collected fallbacks in one line."""
        named = [source for source in self.sources if source]
        text = f"{self.count} placeholder(s) rendered fallback content"
        if named:
            text += f": {', '.join(named)}"
        return text


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    http_log_level: int | str | None = None,
) -> FallbackCollector:
    """Configure logging for a CLI run.

    Parameters
    ----------
    log_level : int | str
        Level for htmlstitch's own loggers, numeric or by name (e.g. "INFO")
    log_file : str, optional
        Also write log output to this file
    trace_mode : bool, default False
        Timestamped format with logger names; HTTP loggers default to DEBUG
    http_log_level : int | str, optional
        Level for the ``httpx``/``httpcore`` loggers. Defaults to DEBUG in
        trace mode, otherwise to ``log_level`` but never below WARNING.

    Returns
    -------
    FallbackCollector
        Collector attached to the ``htmlstitch`` logger for this run

    """
    level = _resolve_level(log_level)
    if http_log_level is not None:
        http_level = _resolve_level(http_log_level)
    elif trace_mode:
        http_level = logging.DEBUG
    else:
        http_level = max(level, logging.WARNING)

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    formatter = logging.Formatter(format_str, datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None)

    # handlers pass everything; the per-logger levels below decide
    root_logger = logging.getLogger()
    root_logger.setLevel(min(level, http_level))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in [h for h in package_logger.handlers if isinstance(h, FallbackCollector)]:
        package_logger.removeHandler(handler)
    collector = FallbackCollector()
    package_logger.addHandler(collector)

    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            package_logger.info("Logging to file: %s", log_file)

    return collector
