from __future__ import annotations

"""Centralized logging setup for envprofiles entry points.

Library modules only call ``logging.getLogger(__name__)``. The CLI calls
:func:`get_logger` with the resolved settings, which attaches a rotating file
handler and a console handler to the ``envprofiles`` logger so every child
logger shares them.

Calling :func:`get_logger` again with a different ``log_dir`` or ``level``
swaps the handlers installed by the previous call; same arguments return the
cached logger untouched.
"""

import logging
import logging.handlers
import os
import pathlib
import sys
from typing import Dict, List, Optional, Tuple, Union

LevelLike = Union[int, str]

# name -> ((log_dir, level), handlers we installed)
_CONFIGURED: Dict[str, Tuple[Tuple[str, int], List[logging.Handler]]] = {}


class _ConsoleHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def parse_level(level: LevelLike) -> int:
    """
    Accept ``logging.DEBUG`` style ints or names like ``"debug"``.

    >>> parse_level("warning")
    30
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def get_logger(
    name: str = "envprofiles",
    log_dir: Optional[str] = None,
    level: LevelLike = logging.INFO,
) -> logging.Logger:
    """Return a configured :class:`logging.Logger`.

    Parameters
    ----------
    name:
        Logger name (also used in log filename: ``{name}.log``).
    log_dir:
        Directory where log files should be written. Created if missing.
    level:
        Level for the logger and both handlers (int or level name).

    Behavior
    --------
    * Rotating file handler (5MB x5 backups) + console handler on stderr.
    * Handlers from an earlier call with other arguments are removed and closed.
    """
    if log_dir is None:
        log_dir = "logs"
    key = (str(pathlib.Path(log_dir).resolve()), parse_level(level))

    logger = logging.getLogger(name)
    previous = _CONFIGURED.get(name)
    if previous is not None:
        if previous[0] == key:
            return logger
        for handler in previous[1]:
            logger.removeHandler(handler)
            handler.close()

    logger.setLevel(key[1])
    pathlib.Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_path = os.path.join(log_dir, f"{name}.log")

    # Rotating file --------------------------------------------------------
    fh = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=5_000_000, backupCount=5, encoding="utf-8"
    )
    fh.setLevel(key[1])
    fh.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )

    # Console --------------------------------------------------------------
    ch = _ConsoleHandler()
    ch.setLevel(key[1])
    ch.setFormatter(logging.Formatter("%(message)s"))

    logger.addHandler(fh)
    logger.addHandler(ch)

    _CONFIGURED[name] = (key, [fh, ch])
    return logger
