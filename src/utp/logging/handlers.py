"""JSON log formatter for reconciliation logs.

One JSON object per line. Records logged during a reconciliation pass carry
a ``reconcile`` object, and the profile fields the reconciler attaches
(``profile``, ``codec``, ``kind``) are promoted to top-level keys so log
pipelines can filter on them directly.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Extras promoted to top-level keys
PROFILE_FIELDS = ("profile", "codec", "kind")

_CONTEXT_FIELDS = frozenset({"reconcile_pass", "reconcile_trigger", "reconcile_tag"})

# Attributes every LogRecord has; anything else came in through extra=
_RECORD_FIELDS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Keys, in order: timestamp (ISO-8601 UTC), level, logger, message, then
    reconcile ({"pass": n, "trigger": t}) inside a pass, the profile fields,
    remaining extras under "extra", and "exception" if one was logged.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        pass_number = getattr(record, "reconcile_pass", None)
        if pass_number is not None:
            entry["reconcile"] = {
                "pass": pass_number,
                "trigger": getattr(record, "reconcile_trigger", None),
            }

        for field in PROFILE_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_FIELDS
            and key not in _CONTEXT_FIELDS
            and key not in PROFILE_FIELDS
            and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
