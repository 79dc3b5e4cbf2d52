"""Logging configuration helpers."""

import logging

ENGINE_LOGGERS = (
    "sugar_meter.services.engine",
    "sugar_meter.services.storage",
)


def configure_logging(level: str | int = logging.INFO) -> None:
    """Route package logs to one stream handler at the given level.

    Engine and storage loggers are pinned to the same level so that resets,
    level-ups and persistence warnings are never filtered below it.
    """
    logger = logging.getLogger("sugar_meter")
    logger.setLevel(level)
    for name in ENGINE_LOGGERS:
        logging.getLogger(name).setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
