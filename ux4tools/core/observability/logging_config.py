"""
Logging configuration — set up once by ``main.cli``.

Every module does ``logger = logging.getLogger(__name__)`` and inherits
this setup. Console records go through ``click.echo`` to stderr, so
they are coloured on a terminal and captured by ``CliRunner`` in tests.

Level precedence:
    --debug / --verbose / --quiet  >  UX4_LOG_LEVEL  >  WARNING

Optional file output via UX4_LOG_FILE (level UX4_LOG_FILE_LEVEL, or the
console level when unset).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

import click

LEVEL_ENV = "UX4_LOG_LEVEL"
FILE_ENV = "UX4_LOG_FILE"
FILE_LEVEL_ENV = "UX4_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

_FMT_CONSOLE = "%(message)s"
_FMT_VERBOSE = "%(asctime)s %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLOURS = {
    logging.DEBUG: "bright_black",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}

# Chatty at INFO/DEBUG; kept at WARNING unless --debug
_NOISY_LOGGERS = ("urllib3", "asyncio", "playwright")


class ClickEchoHandler(logging.Handler):
    """Write records to stderr with ``click.echo``, coloured by level."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            colour = _LEVEL_COLOURS.get(record.levelno)
            if colour:
                message = click.style(message, fg=colour)
            click.echo(message, err=True)
        except Exception:
            self.handleError(record)


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Console level name from the global CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LEVEL_ENV, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name.
        log_file: Optional log file path.
        log_file_level: Level for the file, defaults to ``level``.
        quiet_third_party: Hold noisy libraries at WARNING.
    """
    console_level = _parse_level(level)

    if console_level <= logging.DEBUG:
        fmt = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_CONSOLE)
    elif console_level <= logging.INFO:
        fmt = logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_CONSOLE)
    else:
        fmt = logging.Formatter(_FMT_CONSOLE)

    console = ClickEchoHandler()
    console.setLevel(console_level)
    console.setFormatter(fmt)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, (ClickEchoHandler, logging.FileHandler)):
            handler.close()
    root.addHandler(console)

    root_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)

    for name in _NOISY_LOGGERS:
        noisy = logging.getLogger(name)
        if quiet_third_party and console_level > logging.DEBUG:
            noisy.setLevel(logging.WARNING)
        else:
            noisy.setLevel(logging.NOTSET)


def setup_logging_from_env(debug: bool = False, verbose: bool = False, quiet: bool = False) -> None:
    """``setup_logging`` driven by the global flags and UX4_LOG_* variables."""
    setup_logging(
        level=resolve_level(debug, verbose, quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
        quiet_third_party=not debug,
    )


def _parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
