"""
Structured logging for the uBio service.

Console and file outputs with JSON context, plus counters for remote
calls and per-operation outcomes (record lookups, searches, enrichment).
"""

import copy
import logging
import sys
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Logger with console and file outputs that also tracks
    how remote operations against the authority are faring.
    """

    def __init__(
        self,
        name: str = "ubiows",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console (stderr, so CLI output stays clean)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()
        self.logger.propagate = False

        # Enrichment workers update the counters from several threads
        self._metrics_lock = threading.Lock()
        self.metrics = {
            "remote_calls": 0,
            "operations_attempted": 0,
            "operations_successful": 0,
            "operations_failed": 0,
            "errors_by_type": {},
            "operation_success_rate": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_remote_call(self):
        """Increment the outbound call counter."""
        with self._metrics_lock:
            self.metrics["remote_calls"] += 1

    def record_attempt(self, operation: str):
        """Record an attempt at an operation ("record", "search", "enrichment")."""
        with self._metrics_lock:
            self.metrics["operations_attempted"] += 1
            stats = self.metrics["operation_success_rate"].setdefault(
                operation, {"attempts": 0, "successes": 0}
            )
            stats["attempts"] += 1

    def record_success(self, operation: str):
        with self._metrics_lock:
            self.metrics["operations_successful"] += 1
            if operation in self.metrics["operation_success_rate"]:
                self.metrics["operation_success_rate"][operation]["successes"] += 1

    def record_failure(self, operation: str, error_type: str):
        with self._metrics_lock:
            self.metrics["operations_failed"] += 1
            errors = self.metrics["errors_by_type"]
            errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return a snapshot of the metrics with success rates filled in."""
        with self._metrics_lock:
            metrics_copy = copy.deepcopy(self.metrics)
        for stats in metrics_copy["operation_success_rate"].values():
            if stats["attempts"] > 0:
                stats["success_rate"] = round(
                    stats["successes"] / stats["attempts"], 3
                )
        return metrics_copy

    def log_metrics_summary(self):
        metrics = self.get_metrics()

        attempted = metrics["operations_attempted"]
        successful = metrics["operations_successful"]
        overall_rate = 0
        if attempted > 0:
            overall_rate = round(successful / attempted * 100, 1)

        self.info("=== Authority Session Metrics ===")
        self.info(f"Remote calls: {metrics['remote_calls']}")
        self.info(f"Operations: {successful}/{attempted} ({overall_rate}% success)")

        for operation, stats in metrics["operation_success_rate"].items():
            rate = stats.get("success_rate", 0) * 100
            self.info(f"  {operation}: {stats['successes']}/{stats['attempts']} ({rate:.1f}%)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "ubiows",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the process logger used by the CLI entrypoint.

    Service components take their logger as a constructor argument;
    only the command line wiring should call this.
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the process logger (useful for testing)."""
    global _global_logger
    _global_logger = None
