"""Tests for root logger configuration."""
import logging

from storefront.infrastructure.logging import LOG_FORMAT, configure_logging


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    original_level = root.level
    try:
        first = configure_logging("debug")
        second = configure_logging("WARNING")

        assert first is second
        assert sum(1 for h in root.handlers if getattr(h, "_storefront", False)) == 1
        assert first.formatter._fmt == LOG_FORMAT
        assert root.level == logging.WARNING
    finally:
        root.removeHandler(first)
        root.setLevel(original_level)


def test_unknown_level_falls_back_to_info():
    root = logging.getLogger()
    original_level = root.level
    handler = configure_logging("chatty")
    try:
        assert root.level == logging.INFO
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        root.removeHandler(handler)
        root.setLevel(original_level)
