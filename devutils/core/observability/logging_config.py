"""
Logging configuration for the ``dev`` command and the standalone scripts.

Called once at startup.  Modules log through
``logging.getLogger(__name__)`` and inherit this setup.

Console level, highest precedence first:
    --debug  >  --verbose  >  --quiet  >  DEVUTILS_LOG_LEVEL  >  WARNING

A log file can be added with DEVUTILS_LOG_FILE (and its own level with
DEVUTILS_LOG_FILE_LEVEL).  Installer and script progress is printed by
the CLI, so the console stays quiet unless asked.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LOG_LEVEL = "DEVUTILS_LOG_LEVEL"
ENV_LOG_FILE = "DEVUTILS_LOG_FILE"
ENV_LOG_FILE_LEVEL = "DEVUTILS_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

_FMT_MINIMAL = "%(levelname)s: %(message)s"

_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d: %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# urllib is used for the PyPI version check
_NOISY_LOGGERS = ("urllib3", "urllib")


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if env is None else env
    return env.get(ENV_LOG_LEVEL) or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path (default: ``$DEVUTILS_LOG_FILE``).
        log_file_level: Level for the file handler
            (default: ``$DEVUTILS_LOG_FILE_LEVEL``, else ``level``).
        quiet_third_party: Hold noisy library loggers at WARNING unless
            running at DEBUG.
    """
    numeric_level = _parse_level(level)
    log_file = log_file or os.environ.get(ENV_LOG_FILE) or None
    log_file_level = log_file_level or os.environ.get(ENV_LOG_FILE_LEVEL) or None

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            root.warning("Cannot open log file %s: %s", log_file, e)
        else:
            fh.setLevel(file_level)
            fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
            root.addHandler(fh)

    root.setLevel(effective_level)

    if quiet_third_party and numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Level name to numeric constant; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
