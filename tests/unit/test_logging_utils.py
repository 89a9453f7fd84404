"""Unit tests for logging configuration."""

import logging
from unittest.mock import patch

import pytest

from htmlstitch.composer import compose
from htmlstitch.logging_utils import FallbackCollector, configure_logging

BROKEN = "http://fragments.test/broken"
LOGGER_NAMES = ("htmlstitch", "httpx", "httpcore")


@pytest.fixture(autouse=True)
def restore_logging():
    """Put root and package loggers back the way the test found them."""
    root = logging.getLogger()
    saved_root = (root.level, root.handlers[:])
    saved = {name: (logging.getLogger(name).level, logging.getLogger(name).handlers[:]) for name in LOGGER_NAMES}
    yield
    for handler in root.handlers:
        if handler not in saved_root[1]:
            handler.close()
    root.setLevel(saved_root[0])
    root.handlers[:] = saved_root[1]
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.handlers[:] = handlers


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_package_and_http_levels(self):
        configure_logging(logging.DEBUG)

        assert logging.getLogger("htmlstitch").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_quiet_level_applies_to_http_too(self):
        configure_logging("error")

        assert logging.getLogger("htmlstitch").level == logging.ERROR
        assert logging.getLogger("httpx").level == logging.ERROR

    def test_trace_opens_http_loggers(self):
        configure_logging(logging.DEBUG, trace_mode=True)

        assert logging.getLogger("httpcore").level == logging.DEBUG
        format_str = logging.getLogger().handlers[0].formatter._fmt
        assert "asctime" in format_str
        assert "name" in format_str

    def test_explicit_http_level(self):
        configure_logging(logging.WARNING, http_log_level="INFO")

        assert logging.getLogger("httpx").level == logging.INFO
        assert logging.getLogger("htmlstitch").level == logging.WARNING
        assert logging.getLogger().level == logging.INFO

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "stitch.log"
        configure_logging(logging.INFO, log_file=str(log_file))

        assert len(logging.getLogger().handlers) == 2
        logging.getLogger("htmlstitch.composer").warning("fallback for nav")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "fallback for nav" in log_file.read_text(encoding="utf-8")

    def test_unwritable_file(self, tmp_path):
        """A log file that cannot be opened is reported, not raised."""
        with patch.object(logging.getLogger("htmlstitch"), "warning") as mock_warning:
            configure_logging(logging.INFO, log_file=str(tmp_path / "missing" / "stitch.log"))

        assert len(logging.getLogger().handlers) == 1
        assert mock_warning.called

    def test_one_collector_per_run(self):
        configure_logging(logging.WARNING)
        collector = configure_logging(logging.WARNING)

        collectors = [h for h in logging.getLogger("htmlstitch").handlers if isinstance(h, FallbackCollector)]
        assert collectors == [collector]


@pytest.mark.unit
class TestFallbackCollector:
    """Tests for FallbackCollector."""

    def test_collects_composer_fallbacks(self, fragment_server):
        fragment_server.add(BROKEN, (503, ""))
        collector = configure_logging(logging.WARNING)

        compose(
            f'<fragment src="{BROKEN}">Foo</fragment><fragment>no source</fragment>',
            client=fragment_server.client,
        )

        assert collector.sources == [BROKEN]
        assert collector.summary() == f"1 placeholder(s) rendered fallback content: {BROKEN}"

    def test_ignores_untagged_records(self):
        collector = FallbackCollector()
        logger = logging.getLogger("htmlstitch.tests")
        logger.addHandler(collector)
        try:
            logger.warning("unrelated")
            logger.warning("fell back", extra={"fragment_url": ""})
        finally:
            logger.removeHandler(collector)

        assert collector.count == 1
        assert collector.summary() == "1 placeholder(s) rendered fallback content"
