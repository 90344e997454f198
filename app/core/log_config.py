from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the `app` logger."""

    logger = logging.getLogger("app")
    logger.setLevel(level.upper())

    if not any(getattr(h, "_imagegen_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._imagegen_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
