"""
Logging configuration — central setup for all entrypoints.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  CLASSJARS_LOG_LEVEL env var  >  WARNING (default)

Optional file output via CLASSJARS_LOG_FILE / CLASSJARS_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LEVEL_ENV = "CLASSJARS_LOG_LEVEL"
FILE_ENV = "CLASSJARS_LOG_FILE"
FILE_LEVEL_ENV = "CLASSJARS_LOG_FILE_LEVEL"

# Console format by level: the more verbose the level, the more context
# per line. Anything above INFO prints the bare message.
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_BARE_FORMAT = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

_NOISY_LOGGERS = ("yaml",)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Install the console handler, plus a file handler when ``log_file`` is set.

    Replaces whatever handlers the root logger had. The root level is the
    lower of the two handler levels so a DEBUG log file still receives
    records while the console stays at WARNING.
    """
    console_level = _parse_level(level)
    handlers = [_handler(logging.StreamHandler(sys.stderr), console_level, _console_formatter(console_level))]

    if log_file:
        handlers.append(
            _handler(
                logging.FileHandler(log_file, encoding="utf-8"),
                _parse_level(log_file_level or level),
                logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT),
            )
        )

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_BARE_FORMAT)


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if env is None else env
    return env.get(LEVEL_ENV, "WARNING")


def setup_from_env(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Configure logging from CLI flags plus CLASSJARS_LOG_* variables.

    Returns:
        The console level name that was applied.
    """
    env = os.environ if env is None else env
    level = resolve_level(debug=debug, verbose=verbose, quiet=quiet, env=env)
    setup_logging(
        level=level,
        log_file=env.get(FILE_ENV),
        log_file_level=env.get(FILE_LEVEL_ENV),
        quiet_third_party=not debug,
    )
    return level
