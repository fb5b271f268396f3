"""Logging setup for the initiative store.

Every record carries a ``store`` field naming the database it concerns;
``InitiativeStore`` sets it while opening, and it reads ``-`` elsewhere.
"""

import logging
import sys

from loguru import logger

from initiative.config.models import LoggingConfig

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[store]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class _InterceptHandler(logging.Handler):
    """Forward stdlib records (aiosqlite's among them) to loguru.

    The stdlib logger name, function and line replace loguru's own
    so the output points at the emitting library, not at this handler.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.patch(
            lambda r: r.update(name=record.name, function=record.funcName, line=record.lineno)
        ).opt(exception=record.exc_info).log(level, record.getMessage())


def configure_logging(config: LoggingConfig) -> None:
    """
    Install loguru sinks for the store.

    Console output goes to stderr so ``initiative export`` can write
    JSON to stdout. The aiosqlite logger gets its own threshold, since
    at DEBUG it reports every statement.
    """
    logger.remove()
    logger.configure(extra={"store": "-"})

    serialize = config.format == "json"
    fmt = "{message}" if serialize else _CONSOLE_FORMAT
    sinks: list = [sys.stderr]
    if config.file:
        sinks.append(config.file)

    for sink in sinks:
        options: dict = {"format": fmt, "level": config.level, "serialize": serialize}
        if sink is sys.stderr:
            options["colorize"] = not serialize
        else:
            options.update(
                rotation=config.rotation, retention=config.retention, compression="gz"
            )
        logger.add(sink, **options)

    root = logging.getLogger()
    root.handlers = [_InterceptHandler()]
    root.setLevel(config.level)
    logging.getLogger("aiosqlite").setLevel(config.sqlite_level)

    logger.debug(
        "Logging configured: level={} format={} sqlite_level={}",
        config.level,
        config.format,
        config.sqlite_level,
    )
