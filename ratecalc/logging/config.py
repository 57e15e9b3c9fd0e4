"""
structlog set-up for the valuation engine.

The library never configures logging on import; the GraphQL service and the
demo call `configure_logging` once with the level and format from
`ratecalc.settings`, and every module takes its logger from `get_logger`.
Runner events carry `trade_id`, `measure` and `reason` as key-value pairs.
"""
import logging
import sys

import structlog
from structlog.types import FilteringBoundLogger

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_logging(level: str = "INFO", format_json: bool = False) -> None:
    """Route structlog through stdlib logging on stdout, as console lines or JSON."""
    name = level.upper()
    if name not in _LEVELS:
        raise ValueError(f"unknown log level {level!r}; expected one of {', '.join(_LEVELS)}")
    log_level = getattr(logging, name)

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(log_level)

    renderer = (
        structlog.processors.JSONRenderer()
        if format_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    return structlog.get_logger(name)
