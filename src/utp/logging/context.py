"""Reconciliation context for structured logging.

Provides context propagation using contextvars, enabling automatic
injection of the reconciliation pass number and trigger into log records.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

# Context variables for reconciliation pass identification
_reconcile_pass: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "reconcile_pass", default=None
)
_reconcile_trigger: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "reconcile_trigger", default=None
)


@contextmanager
def reconcile_context(
    pass_number: int,
    trigger: str | None = None,
) -> Generator[None, None, None]:
    """Context manager for one reconciliation pass.

    Sets context on entry and restores the previous values on exit.

    Args:
        pass_number: Sequence number of the pass (1 for the first).
        trigger: What started the pass ("startup", "settings-change",
            "manual").

    Yields:
        None

    Example:
        with reconcile_context(3, "settings-change"):
            logger.info("Registering profiles")  # Tagged [R3:settings-change]
    """
    pass_token = _reconcile_pass.set(pass_number)
    trigger_token = _reconcile_trigger.set(trigger)
    try:
        yield
    finally:
        _reconcile_pass.reset(pass_token)
        _reconcile_trigger.reset(trigger_token)


def get_reconcile_context() -> tuple[int | None, str | None]:
    """Get the current reconciliation context.

    Returns:
        Tuple of (pass_number, trigger), either may be None.
    """
    return _reconcile_pass.get(), _reconcile_trigger.get()


class ReconcileContextFilter(logging.Filter):
    """Logging filter that injects reconciliation context into log records.

    Adds reconcile_pass and reconcile_trigger attributes to LogRecord. For
    text format, also adds a compact reconcile_tag like [R3:startup].
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject reconciliation context into log record.

        Args:
            record: The log record to process.

        Returns:
            Always True (does not filter, only enriches).
        """
        pass_number, trigger = get_reconcile_context()

        record.reconcile_pass = pass_number
        record.reconcile_trigger = trigger

        if pass_number is not None:
            if trigger:
                record.reconcile_tag = f"[R{pass_number}:{trigger}] "
            else:
                record.reconcile_tag = f"[R{pass_number}] "
        else:
            record.reconcile_tag = ""

        return True
