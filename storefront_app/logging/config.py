"""
Structured logging for the storefront engine.

Every component logs through structlog. Catalog and persistence code use
plain module loggers; the unlock state machine and presentation layer get
loggers pre-bound with a subsystem tag so their events can be filtered out
of a mixed stream (state transitions double as a purchase audit trail).
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger, Processor

STATE_SUBSYSTEM = "unlock_state"
PRESENTATION_SUBSYSTEM = "presentation"


def _shared_processors(include_timestamp: bool, include_caller: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if include_timestamp:
        chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    if include_caller:
        chain.append(structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ))
    return chain


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list[Processor]] = None
) -> None:
    """
    Configure structlog on top of the stdlib root logger.

    Args:
        level: Logging level name, e.g. "DEBUG" or "warning"
        format_json: Render one JSON object per line instead of console output
        include_timestamp: Stamp events with a UTC ISO timestamp
        include_caller: Add module and line number of the logging call
        extra_processors: Run before the renderer, e.g. to redact fields
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)

    processors = _shared_processors(include_timestamp, include_caller)
    processors.extend(extra_processors or [])
    processors.append(
        structlog.processors.JSONRenderer() if format_json
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Module logger, typically get_logger(__name__)."""
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """Logger for unlock transitions, tagged for the purchase audit trail."""
    return get_logger(name).bind(subsystem=STATE_SUBSYSTEM, audit_trail=True)


def get_sync_logger(name: str) -> FilteringBoundLogger:
    return get_logger(name).bind(subsystem=PRESENTATION_SUBSYSTEM)


def log_state_transition(
    logger: FilteringBoundLogger,
    item_id: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Emit one "State transition" event for an item.

    Args:
        logger: Usually the state machine's audit logger
        item_id: Catalog identifier of the item
        from_state: State value before the transition
        to_state: State value after the transition
        trigger: User action or event that caused it
        context: Extra fields, logged under "context"
    """
    fields: dict[str, Any] = {
        "item_id": item_id,
        "from_state": from_state,
        "to_state": to_state,
        "trigger": trigger,
    }
    if context:
        fields["context"] = context

    logger.info("State transition", **fields)
