"""Tests for storefront_sanitize.log — logger namespace."""

from __future__ import annotations

import logging

import pytest

from storefront_sanitize import sanitize_html
from storefront_sanitize.log import _PREFIX, get_logger


class TestGetLogger:
    def test_prefixed(self) -> None:
        log = get_logger("scanner")
        assert log.name == "storefront_sanitize.scanner"
        assert isinstance(log, logging.Logger)

    def test_already_prefixed(self) -> None:
        assert get_logger("storefront_sanitize.style").name == "storefront_sanitize.style"

    def test_bare_prefix(self) -> None:
        assert get_logger("storefront_sanitize").name == "storefront_sanitize"

    def test_children_propagate(self) -> None:
        assert get_logger("scanner").parent is logging.getLogger(_PREFIX)


class TestLibraryLogging:
    def test_null_handler_installed(self) -> None:
        handlers = logging.getLogger(_PREFIX).handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)

    def test_no_stream_handlers(self) -> None:
        handlers = logging.getLogger(_PREFIX).handlers
        assert not any(type(h) is logging.StreamHandler for h in handlers)

    def test_records_reach_application_handlers(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger=_PREFIX):
            sanitize_html("<iframe></iframe><p>x</p>")
        scanner_records = [r for r in caplog.records if r.name == f"{_PREFIX}.scanner"]
        assert any("<iframe>" in r.getMessage() for r in scanner_records)

    def test_silent_at_default_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger=_PREFIX):
            sanitize_html('<iframe src="x"></iframe><a onclick="x()">y</a>')
        assert caplog.records == []
