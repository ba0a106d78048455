"""structlog configuration for settlectl.

Every log line goes to stderr so stdout stays reserved for command
results. Human mode uses structlog's console renderer; ``--log-json``
emits one JSON object per line.

Service events carry money as ``Decimal`` and times as ``datetime``;
:func:`_ledger_values_as_text` renders both as exact strings so a JSON
log never shows a float approximation or a ``repr``.
"""

from __future__ import annotations

import logging
import sys
from datetime import date
from decimal import Decimal
from typing import Any

import structlog

# Loggers the CLI owns; everything else stays at the root WARNING level.
SETTLE_LOGGER = "settlectl"
_PINNED_QUIET = ("sqlalchemy",)


def _ledger_values_as_text(
    _logger: Any, _method: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = format(value, "f")
        elif isinstance(value, date):
            event_dict[key] = value.isoformat()
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Args:
        verbose: Let ``settlectl.*`` DEBUG events through (spans, rollbacks).
        log_json: Render JSON lines instead of console output.

    Safe to call once per CLI invocation; earlier handlers are replaced.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _ledger_values_as_text,
    ]

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(SETTLE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _PINNED_QUIET:
        logging.getLogger(name).setLevel(logging.WARNING)
