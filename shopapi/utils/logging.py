# shopapi/utils/logging.py
import logging
import sys

import structlog

from shopapi.utils.settings import LOG_LEVEL, LOG_FORMAT

_configured = False


def _setup_stdlib_logging():
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("shopapi")
    root.setLevel(LOG_LEVEL)
    root.handlers = [handler]

    # sqlalchemy loguje kazde zapytanie na INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def _setup_structlog():
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.contextvars.merge_contextvars,
    ]

    if LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging():
    global _configured
    if _configured:
        return
    _setup_stdlib_logging()
    _setup_structlog()
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    configure_logging()
    return structlog.get_logger(name)
