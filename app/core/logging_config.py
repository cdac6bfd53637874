# /app/core/logging_config.py

import logging

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """
    Configures the root logger once at application startup.
    Calling it again only adjusts the level, it never stacks handlers.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO))

    if not any(getattr(h, "_school_dashboard", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._school_dashboard = True
        root.addHandler(handler)

    # SQL echo is controlled by the engine, keep the driver chatter out of INFO logs.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
