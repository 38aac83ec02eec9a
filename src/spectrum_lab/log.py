"""Logger factory shared by the library and the CLI."""

import logging
from typing import Optional

ROOT_LOGGER = "spectrum_lab"
DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def get_logger(
    name: str = ROOT_LOGGER,
    level: Optional[int] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Return a configured :class:`logging.Logger` instance.

    A ``StreamHandler`` is attached to the package root logger only
    once, so calling this repeatedly never duplicates log lines.
    Module loggers (``spectrum_lab.transform`` and friends) carry no
    handler of their own and inherit the root level.

    Args:
        name: Dotted logger name.
        level: Optional level for the returned logger.  The root
            logger defaults to ``WARNING`` when first configured.
        fmt: Format string for the root handler.

    Returns:
        The named logger.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_level(level: int) -> None:
    """Set the level of the package root logger."""
    get_logger(ROOT_LOGGER, level=level)
