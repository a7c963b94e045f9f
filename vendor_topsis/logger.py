# -*- coding: utf-8 -*-
"""
Logging system for the vendor TOPSIS ranking tool.

Features:
- Colored console output with level-based styling
- Clean file logging (no ANSI codes) with size-based rotation
- Hierarchical module loggers under a single root name
- Phase tracking for the ranking pipeline (timing, named steps)
- Ranking tables and metric lines for results
"""

import logging
import logging.handlers
import sys
import threading
import os
import re
import time
from pathlib import Path
from typing import Optional, Dict, Any, List, Sequence, Union
from dataclasses import dataclass, field
from enum import Enum


# =============================================================================
# Constants
# =============================================================================

LOG_NAME = "vendor_topsis"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_DATE_FORMAT = "%H:%M:%S"
MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


# =============================================================================
# ANSI Color Definitions
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    BRIGHT_RED = "\033[91m"

    ANSI_PATTERN = re.compile(r'\033\[[0-9;]*m')

    @classmethod
    def strip(cls, text: str) -> str:
        """Remove all ANSI codes from text."""
        return cls.ANSI_PATTERN.sub('', text)

    @classmethod
    def supports_color(cls) -> bool:
        """Check if terminal supports colors."""
        if os.getenv("NO_COLOR"):
            return False
        if os.getenv("FORCE_COLOR"):
            return True
        isatty = getattr(sys.stdout, "isatty", None)
        return bool(isatty and isatty())


# =============================================================================
# Formatters
# =============================================================================

class ColoredFormatter(logging.Formatter):
    """Formatter with level-based ANSI colors for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.CYAN,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BRIGHT_RED + Colors.BOLD,
    }

    def __init__(self,
                 fmt: Optional[str] = None,
                 datefmt: Optional[str] = None,
                 use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and Colors.supports_color()

    def format(self, record: logging.LogRecord) -> str:
        # Copy so other handlers see the undecorated record
        record = logging.makeLogRecord(record.__dict__)
        if self.use_colors:
            color = self.LEVEL_COLORS.get(record.levelno, "")
            record.levelname = f"{color}{Colors.BOLD}{record.levelname:8}{Colors.RESET}"
            record.msg = f"{color}{record.msg}{Colors.RESET}"
        return super().format(record)


class CleanFormatter(logging.Formatter):
    """Plain formatter for file output, strips any ANSI codes."""

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        if isinstance(record.msg, str):
            record.msg = Colors.strip(record.msg)
        return super().format(record)


# =============================================================================
# Handlers
# =============================================================================

class SafeRotatingFileHandler(logging.handlers.RotatingFileHandler):
    """Rotating file handler serialising emits across threads."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._emit_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        with self._emit_lock:
            try:
                super().emit(record)
            except Exception:
                self.handleError(record)


# =============================================================================
# Progress Tracking
# =============================================================================

@dataclass
class PhaseMetrics:
    """Metrics for a pipeline phase."""
    name: str
    start_time: float
    end_time: Optional[float] = None
    status: str = "running"
    steps: List[str] = field(default_factory=list)

    @property
    def elapsed(self) -> float:
        end = self.end_time or time.time()
        return end - self.start_time


class ProgressLogger:
    """
    Context manager logging the start, named steps and end of a phase.

    The ranking computation itself is instantaneous; this only reports
    the stages it went through, in order, for the step-by-step display.

    Example:
        with ProgressLogger(logger, "Ranking") as progress:
            result = calculator.calculate(alternatives, criteria)
            progress.log_step("Decision matrix built")
    """

    STEP_ICONS = {"done": "✓", "skip": "⊘", "warn": "⚡", "fail": "✗"}

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.metrics = PhaseMetrics(name=operation, start_time=0.0)

    def __enter__(self) -> 'ProgressLogger':
        self.metrics.start_time = time.time()
        self.logger.info(f"▶ Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.metrics.end_time = time.time()
        if exc_type is None:
            self.metrics.status = "completed"
            self.logger.info(f"✓ Completed: {self.operation} ({self.metrics.elapsed:.2f}s)")
        else:
            self.metrics.status = "failed"
            self.logger.error(
                f"✗ Failed: {self.operation} ({self.metrics.elapsed:.2f}s) - "
                f"{exc_type.__name__}: {exc_val}"
            )
        return False

    def log_step(self, step_name: str, status: str = "done") -> None:
        """Log a named step of the current phase."""
        self.metrics.steps.append(step_name)
        icon = self.STEP_ICONS.get(status, "•")
        self.logger.info(f"  {icon} {step_name}")


# =============================================================================
# Logger Factory
# =============================================================================

class LoggerFactory:
    """Centralised creation and configuration of loggers."""

    _loggers: Dict[str, logging.Logger] = {}
    _configured: bool = False
    _root_logger: Optional[logging.Logger] = None

    @classmethod
    def setup(cls,
              name: str = LOG_NAME,
              level: Union[int, str, LogLevel] = logging.INFO,
              log_file: Optional[Path] = None,
              console: bool = True,
              use_colors: bool = True,
              console_level: Union[int, str, None] = None,
              max_bytes: int = MAX_LOG_SIZE,
              backup_count: int = BACKUP_COUNT) -> logging.Logger:
        """
        Setup and configure the root logger.

        Parameters
        ----------
        name : str
            Logger name
        level : int, str, or LogLevel
            Logger level
        log_file : Path, optional
            Rotating plain-text log file, always written at DEBUG
        console : bool
            Enable console output
        use_colors : bool
            Enable colored console output
        console_level : int or str, optional
            Console handler level (defaults to ``level``)

        Returns
        -------
        logging.Logger
            Configured logger instance
        """
        level = _coerce_level(level)
        console_level = _coerce_level(console_level) if console_level is not None else level

        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.propagate = False

        if console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(console_level)
            if use_colors:
                console_fmt = ColoredFormatter(
                    fmt='%(asctime)s │ %(levelname)s │ %(message)s',
                    datefmt=CONSOLE_DATE_FORMAT,
                )
            else:
                console_fmt = CleanFormatter(
                    fmt='%(asctime)s | %(levelname)-8s | %(message)s',
                    datefmt=CONSOLE_DATE_FORMAT,
                )
            console_handler.setFormatter(console_fmt)
            logger.addHandler(console_handler)

        if log_file:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = SafeRotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(CleanFormatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
                datefmt=DEFAULT_DATE_FORMAT
            ))
            logger.addHandler(file_handler)

        cls._root_logger = logger
        cls._loggers[name] = logger
        cls._configured = True
        return logger

    @classmethod
    def get_logger(cls, name: str = LOG_NAME) -> logging.Logger:
        """
        Get a logger instance.

        Names outside the root hierarchy are nested under it, so
        ``get_logger('session')`` returns ``vendor_topsis.session``.
        """
        if name in cls._loggers:
            return cls._loggers[name]

        root_name = cls._root_logger.name if cls._root_logger else LOG_NAME
        if name == root_name or name.startswith(root_name + "."):
            logger = logging.getLogger(name)
        else:
            logger = logging.getLogger(f"{root_name}.{name}")

        cls._loggers[name] = logger
        return logger

    @classmethod
    def get_module_logger(cls, module_name: str) -> logging.Logger:
        """Get a logger for a module, e.g. ``'mcdm.topsis'``."""
        root_name = cls._root_logger.name if cls._root_logger else LOG_NAME
        return cls.get_logger(f"{root_name}.{module_name}")


def _coerce_level(level: Union[int, str, LogLevel]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    if isinstance(level, LogLevel):
        return level.value
    return level


# =============================================================================
# Convenience Functions
# =============================================================================

def setup_logger(name: str = LOG_NAME,
                 level: Union[int, str] = logging.INFO,
                 console: bool = True,
                 debug_file: Optional[Path] = None,
                 use_colors: bool = False) -> logging.Logger:
    """
    Setup and configure logger (convenience function).

    Notes
    -----
    - Console output: ``level``, simple text format unless colors requested
    - Debug file: DEBUG level, detailed logging with source location
    """
    return LoggerFactory.setup(
        name=name,
        level=logging.DEBUG,
        log_file=debug_file,
        console=console,
        use_colors=use_colors,
        console_level=level,
    )


def get_logger(name: str = LOG_NAME) -> logging.Logger:
    """Get existing logger or create a child of the root logger."""
    return LoggerFactory.get_logger(name)


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a logger for a specific module."""
    return LoggerFactory.get_module_logger(module_name)


# =============================================================================
# Pipeline-Specific Utilities
# =============================================================================

class PipelineLogger:
    """Structured logging of banners, metrics and ranking tables."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def banner(self, title: str, char: str = "═", width: int = 60) -> None:
        self.logger.info(char * width)
        self.logger.info(f"{title.center(width)}")
        self.logger.info(char * width)

    def metric(self, name: str, value: Any, unit: str = "") -> None:
        value_str = f"{value:.4f}" if isinstance(value, float) else str(value)
        suffix = f" {unit}" if unit else ""
        self.logger.info(f"  • {name}: {value_str}{suffix}")

    def metrics(self, metrics_dict: Dict[str, Any]) -> None:
        for name, value in metrics_dict.items():
            self.metric(name, value)

    def ranking(self, rankings: Sequence[tuple], title: str = "Rankings",
                top_n: Optional[int] = None) -> None:
        """Log ``(name, closeness)`` pairs already sorted by rank."""
        shown = rankings if top_n is None else rankings[:top_n]
        self.logger.info(f"  {title}:")
        for i, (entity, score) in enumerate(shown, 1):
            self.logger.info(f"    {i}. {entity}: {score:.4f}")

    def matrix(self, label: str, frame) -> None:
        """Dump a matrix or vector at DEBUG level."""
        self.logger.debug(f"{label}:\n{frame}")


__all__ = [
    'setup_logger',
    'get_logger',
    'get_module_logger',
    'LoggerFactory',
    'ProgressLogger',
    'PipelineLogger',
    'LogLevel',
    'Colors',
    'ColoredFormatter',
    'CleanFormatter',
    'LOG_NAME',
]
