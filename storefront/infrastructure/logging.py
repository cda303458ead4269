"""
Logging infrastructure.

One stream handler on the root logger; modules log through
`logging.getLogger(__name__)`.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Third-party loggers that drown request logs at INFO
NOISY_LOGGERS = ("aiosqlite", "sqlalchemy.engine", "httpx")


def configure_logging(level: str = "INFO") -> logging.Handler:
    """
    Configure the root logger. Safe to call more than once.

    Args:
        level: Level name, e.g. "INFO" or "DEBUG"

    Returns:
        The storefront handler attached to the root logger
    """
    root = logging.getLogger()
    handler = next(
        (h for h in root.handlers if getattr(h, "_storefront", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._storefront = True
        root.addHandler(handler)

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
