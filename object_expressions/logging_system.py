"""
Logging System for Object Expressions

A single package logger gated by a verbosity level. Evaluation results are
reported at DETAILED, derivative traces at VERBOSE, and validation
problems from MODERATE upwards.
"""

import logging
import sys
from typing import Optional
from enum import Enum

from . import config


class LogLevel(Enum):
    """Verbosity levels, ordered by value"""
    SILENT = 0      # Nothing is emitted
    MINIMAL = 1     # Milestones only
    MODERATE = 2    # Milestones and warnings
    DETAILED = 3    # Plus evaluation results
    VERBOSE = 4     # Plus derivative and cross-check traces


class ExpressionLogger:
    """
    Wraps the 'object_expressions' logger and filters by LogLevel
    """

    def __init__(self, log_level: LogLevel = LogLevel.MODERATE):
        self.log_level = log_level

        self.logger = logging.getLogger('object_expressions')
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()

        if self.log_level != LogLevel.SILENT:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%H:%M:%S'
            ))
            self.logger.addHandler(handler)

    def enabled(self, required_level: LogLevel) -> bool:
        return self.log_level != LogLevel.SILENT and self.log_level.value >= required_level.value

    def milestone(self, message: str):
        if self.enabled(LogLevel.MINIMAL):
            self.logger.info(f"MILESTONE: {message}")

    def warning(self, message: str):
        if self.enabled(LogLevel.MODERATE):
            self.logger.warning(message)

    def detail(self, message: str):
        if self.enabled(LogLevel.DETAILED):
            self.logger.info(message)

    def debug(self, message: str):
        if self.enabled(LogLevel.VERBOSE):
            self.logger.debug(f"DEBUG: {message}")


def _default_level() -> LogLevel:
    try:
        return LogLevel[config.LOG_LEVEL]
    except KeyError:
        return LogLevel.MODERATE


_global_logger: Optional[ExpressionLogger] = None


def get_logger() -> ExpressionLogger:
    """Get or create the global logger instance"""
    global _global_logger
    if _global_logger is None:
        _global_logger = ExpressionLogger(log_level=_default_level())
    return _global_logger


def set_log_level(level: LogLevel):
    global _global_logger
    if _global_logger is None:
        _global_logger = ExpressionLogger(log_level=level)
    else:
        _global_logger.log_level = level


def configure_logging(log_level: LogLevel = LogLevel.MODERATE) -> ExpressionLogger:
    """Replace the global logger, resetting its handlers"""
    global _global_logger
    _global_logger = ExpressionLogger(log_level=log_level)
    return _global_logger


def is_enabled(level: LogLevel) -> bool:
    """True if messages at `level` would be emitted; lets callers skip building them"""
    return get_logger().enabled(level)


def log_milestone(message: str):
    get_logger().milestone(message)


def log_warning(message: str):
    get_logger().warning(message)


def log_detail(message: str):
    get_logger().detail(message)


def log_debug(message: str):
    get_logger().debug(message)
