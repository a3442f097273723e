"""Unit tests for logging context module."""

import logging

from utp.logging.context import (
    ReconcileContextFilter,
    get_reconcile_context,
    reconcile_context,
)


def make_record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg="message",
        args=(),
        exc_info=None,
    )


class TestReconcileContextManager:
    """Tests for reconcile_context context manager."""

    def test_default_context_is_none(self) -> None:
        """Test that context is empty outside a pass."""
        assert get_reconcile_context() == (None, None)

    def test_sets_values(self) -> None:
        """Test that values are set on entry."""
        with reconcile_context(3, "settings-change"):
            assert get_reconcile_context() == (3, "settings-change")

    def test_restores_on_exit(self) -> None:
        """Test that context is cleared on exit."""
        with reconcile_context(1, "startup"):
            pass
        assert get_reconcile_context() == (None, None)

    def test_nested_restores_outer(self) -> None:
        """Test that a nested pass restores the outer one."""
        with reconcile_context(1, "startup"):
            with reconcile_context(2):
                assert get_reconcile_context() == (2, None)
            assert get_reconcile_context() == (1, "startup")

    def test_restores_after_exception(self) -> None:
        """Test that context is cleared when the body raises."""
        try:
            with reconcile_context(5, "manual"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_reconcile_context() == (None, None)


class TestReconcileContextFilter:
    """Tests for ReconcileContextFilter."""

    def test_tag_with_trigger(self) -> None:
        """Test the compact tag inside a triggered pass."""
        record = make_record()
        with reconcile_context(3, "startup"):
            assert ReconcileContextFilter().filter(record) is True

        assert record.reconcile_pass == 3
        assert record.reconcile_trigger == "startup"
        assert record.reconcile_tag == "[R3:startup] "

    def test_tag_without_trigger(self) -> None:
        """Test the tag when no trigger is set."""
        record = make_record()
        with reconcile_context(7):
            ReconcileContextFilter().filter(record)

        assert record.reconcile_tag == "[R7] "

    def test_outside_pass(self) -> None:
        """Test that records outside a pass get empty context."""
        record = make_record()
        ReconcileContextFilter().filter(record)

        assert record.reconcile_pass is None
        assert record.reconcile_trigger is None
        assert record.reconcile_tag == ""
