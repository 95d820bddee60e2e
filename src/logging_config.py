"""
Logging Configuration for the Dynasty Free Agency engine

The engine modules only ever call logging.getLogger(__name__); hosts decide
where the output goes by calling one of the setup functions here once at
startup.

Usage Example:
    from logging_config import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="logs")

    logger = get_logger(__name__)
    logger.info("Week 3 evaluation started")

Log Files Created:
- logs/dynasty_fa.log: Main log (INFO+)
- logs/dynasty_fa_debug.log: Per-bid scoring detail (DEBUG+)
- logs/dynasty_fa_error.log: Errors only (ERROR+)

Each file rotates at 10MB with 5 backups.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional


DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "dynasty_fa"


class ColoredFormatter(logging.Formatter):
    """Console formatter that wraps the level name in ANSI colors."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        # Format a copy so file handlers sharing the record see a plain level name
        colored = logging.makeLogRecord(record.__dict__)
        if colored.levelname in self.COLORS:
            colored.levelname = (
                f"{self.COLORS[colored.levelname]}{colored.levelname}{self.COLORS['RESET']}"
            )
        return super().format(colored)


def _rotating_handler(
    log_dir: str,
    suffix: str,
    level: int,
    log_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    filename = f"{LOG_FILE_PREFIX}{suffix}.log"
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, filename),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Setup application-wide logging configuration.

    Replaces any handlers already attached to the root logger, so calling
    it twice reconfigures rather than duplicates output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to rotating files
        max_bytes: Maximum size per log file before rotation
        backup_count: Number of rotated files to keep
        format_style: "detailed" or "simple" format for the main log

    Example:
        >>> setup_logging(level="DEBUG", log_dir="logs", enable_console=True)
    """
    numeric_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        main_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

        for suffix, handler_level, handler_format in (
            ("", logging.INFO, main_format),
            ("_debug", logging.DEBUG, DETAILED_FORMAT),
            ("_error", logging.ERROR, DETAILED_FORMAT),
        ):
            root_logger.addHandler(
                _rotating_handler(log_dir, suffix, handler_level, handler_format, max_bytes, backup_count)
            )

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass __name__)."""
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with traceback and key=value context.

    Example:
        >>> try:
        ...     evaluate_cycle(bids, players, market, settings)
        ... except EvaluationIntegrityError as e:
        ...     log_exception(logger, e, context={"league_id": "lg1", "week": 3})
        ...     raise
    """
    context_str = ""
    if context:
        context_str = f" [{', '.join(f'{k}={v}' for k, v in context.items())}]"

    logger.log(
        getattr(logging, level.upper()),
        f"Exception occurred{context_str}: {type(exception).__name__}: {exception}",
        exc_info=True
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Set the level of one module or package logger.

    Example:
        >>> configure_module_logger("free_agency.bid_evaluator", level="DEBUG")
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    logger.propagate = propagate

    return logger


class LogContext:
    """
    Context manager for temporary log level changes.

    Example:
        >>> with LogContext(get_logger("free_agency"), "DEBUG"):
        ...     evaluate_cycle(bids, players, market)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = getattr(logging, level.upper())
        self.original_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.original_level)


# Package presets

def setup_free_agency_logging(level: str = "INFO") -> None:
    """
    Configure the bid engine, market ripple and FA week loggers.

    DEBUG shows the component scores of every bid.
    """
    configure_module_logger("free_agency", level=level)
    configure_module_logger("free_agency.bid_evaluator", level=level)
    configure_module_logger("free_agency.market_ripple", level=level)
    configure_module_logger("free_agency.fa_week_manager", level=level)


def setup_salary_cap_logging(level: str = "WARNING") -> None:
    """Cap math is called per bid and per year; default to WARNING."""
    configure_module_logger("salary_cap", level=level)


def setup_negotiation_logging(level: str = "INFO") -> None:
    configure_module_logger("player_management", level=level)
    configure_module_logger("player_management.negotiation_engine", level=level)


# Quick setup presets

def setup_production_logging(log_dir: str = "logs") -> None:
    """INFO to rotating files only, simple format."""
    setup_logging(
        level="INFO",
        log_dir=log_dir,
        enable_console=False,
        enable_file=True,
        format_style="simple"
    )


def setup_development_logging(log_dir: str = "logs") -> None:
    """DEBUG to colored console and files, detailed format."""
    setup_logging(
        level="DEBUG",
        log_dir=log_dir,
        enable_console=True,
        enable_file=True,
        format_style="detailed"
    )


def setup_testing_logging() -> None:
    """WARNING to console only, keeping test output quiet."""
    setup_logging(
        level="WARNING",
        log_dir="logs",
        enable_console=True,
        enable_file=False,
        format_style="simple"
    )
