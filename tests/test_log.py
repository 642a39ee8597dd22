"""Tests for structlog configuration."""

import io
import json
import logging
import sys

import structlog

from zui.log import configure_logging, resolve_level


class TestResolveLevel:
    """Level selection from settings and flags."""

    def test_verbose_wins(self):
        assert resolve_level("ERROR", verbose=True, quiet=True) == logging.DEBUG

    def test_quiet(self):
        assert resolve_level("DEBUG", quiet=True) == logging.ERROR

    def test_configured_name(self):
        assert resolve_level("warning") == logging.WARNING

    def test_unknown_name_falls_back_to_info(self):
        assert resolve_level("chatty") == logging.INFO


class TestConfigureLogging:
    """Output stream and rendering."""

    def test_stderr_is_looked_up_after_configuration(self, monkeypatch):
        during = io.StringIO()
        monkeypatch.setattr(sys, "stderr", during)
        configure_logging(logging.INFO)
        during.close()

        after = io.StringIO()
        monkeypatch.setattr(sys, "stderr", after)
        structlog.get_logger().info("package_published", package="Base")

        assert "package_published" in after.getvalue()

    def test_explicit_stream_and_json(self):
        stream = io.StringIO()
        configure_logging(logging.INFO, fmt="json", stream=stream)

        structlog.get_logger().info("package_published", package="Base")

        line = json.loads(stream.getvalue().splitlines()[0])
        assert line["event"] == "package_published"
        assert line["package"] == "Base"
        assert line["level"] == "info"

    def test_level_filtering(self):
        stream = io.StringIO()
        configure_logging(logging.ERROR, stream=stream)

        structlog.get_logger().info("quiet_event")

        assert stream.getvalue() == ""
