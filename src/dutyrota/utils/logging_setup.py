"""
Duty Rota Logging
=================
Package logger ``dutyrota`` with a colored console handler, an optional
rotating log file and call tracing for the engine entry points.

Levels:
    TRACE (5): Engine entry/exit with summarized arguments
    DEBUG (10): Per-week assignment decisions
    INFO (20): Generation, import and provider progress
    WARNING (30): Skipped holidays, leave entries or CSV rows
    ERROR (40): Holiday provider and storage failures
"""
import functools
import logging
import sys
import time
from contextlib import contextmanager
from datetime import date
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TextIO

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

ROOT_LOGGER_NAME = "dutyrota"

# -v count on the command line
LEVEL_BY_VERBOSITY = {0: "WARNING", 1: "INFO", 2: "DEBUG"}

CONSOLE_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


def level_for_verbosity(verbose: int) -> str:
    if verbose >= 3:
        return "TRACE"
    return LEVEL_BY_VERBOSITY.get(max(verbose, 0), "WARNING")


def _parse_level(name: str) -> int:
    if name.upper() == "TRACE":
        return TRACE
    return getattr(logging, name.upper(), logging.INFO)


class ColoredFormatter(logging.Formatter):
    """Console formatter; colors only when the target stream is a terminal."""

    COLORS = {
        TRACE: "\033[90m",
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_color: bool = False):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if self.use_color and color:
            return f"{color}{message}{self.RESET}"
        return message


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console_level: Optional[str] = None,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``dutyrota`` logger, replacing any earlier handlers.

    Args:
        level: Level for the log file (and console unless overridden)
        log_file: Rotating log file path; None disables file output
        console_level: Console level, defaults to ``level``
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept
        stream: Console stream, stderr by default so stdout stays clean
            for CSV/JSON output
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(TRACE)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    file_level = _parse_level(level)
    cons_level = _parse_level(console_level or level)

    stream = stream or sys.stderr
    console = logging.StreamHandler(stream)
    console.setLevel(cons_level)
    isatty = getattr(stream, "isatty", None)
    console.setFormatter(ColoredFormatter(
        CONSOLE_FORMAT, datefmt="%H:%M:%S", use_color=bool(isatty and isatty()),
    ))
    logger.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.debug(
        f"Logging initialized: console={logging.getLevelName(cons_level)}, "
        f"file={logging.getLevelName(file_level) if log_file else 'disabled'}"
    )
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. ``get_logger("dutyrota.engine.generator")``."""
    return logging.getLogger(name)


def summarize(value: Any, limit: int = 50) -> str:
    """Short trace rendering: schedules and collections by size, dates as ISO."""
    weeks = getattr(value, "weeks", None)
    if isinstance(weeks, list) and hasattr(value, "year"):
        return f"<{type(value).__name__} {value.year}: {len(weeks)} weeks>"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple, set, dict)) and len(value) > 3:
        return f"<{type(value).__name__} of {len(value)}>"
    text = repr(value)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def log_function_call(func: Callable) -> Callable:
    """
    Trace entry, exit and elapsed time of ``func`` at TRACE level.

    Exceptions are logged at ERROR and re-raised unchanged.
    """
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.trace.{func.__module__}")

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        name = func.__name__
        if logger.isEnabledFor(TRACE):
            parts = [summarize(a) for a in args]
            parts += [f"{k}={summarize(v)}" for k, v in kwargs.items()]
            logger.log(TRACE, f"→ {name}({', '.join(parts)})")

        started = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"✖ {name} raised: {type(e).__name__}: {e}")
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(TRACE, f"← {name} returned: {summarize(result, 100)} ({elapsed_ms:.1f} ms)")
        return result

    return wrapper


class PassLogger:
    """Progress log for one assignment pass, indented by nested sections."""

    def __init__(self, name: str = "dutyrota.engine"):
        self.logger = logging.getLogger(name)
        self.indent = 0

    def _pad(self) -> str:
        return "  " * self.indent

    def phase(self, title: str) -> None:
        self.logger.info(f"{'=' * 12} {title} {'=' * 12}")

    def step(self, description: str) -> None:
        self.logger.info(f"{self._pad()}▸ {description}")

    def week(self, week_start: date, outcome: str) -> None:
        """Per-week decision, DEBUG only."""
        self.logger.debug(f"{self._pad()}  {week_start.isoformat()}: {outcome}")

    @contextmanager
    def section(self, title: str) -> Iterator[None]:
        self.logger.debug(f"{self._pad()}┌─ {title}")
        self.indent += 1
        try:
            yield
        finally:
            self.indent -= 1
            self.logger.debug(f"{self._pad()}└─ {title}")
