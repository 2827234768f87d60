"""
Structured logging for playletlink.

Provides console and file output with keyword context, plus run metrics
(dataset rows, ranking calls, match outcomes) for the end-of-run summary.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for the matching run summary.
    """

    def __init__(
        self,
        name: str = "playletlink",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to a daily file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = self._empty_metrics()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(message)s',
                datefmt='%H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"playletlink_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # file gets everything
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

    @staticmethod
    def _empty_metrics() -> dict:
        return {
            "api_calls": 0,
            "records_loaded": 0,
            "rows_discarded": 0,
            "matches_exact": 0,
            "matches_fuzzy": 0,
            "not_found": 0,
            "errors_by_type": {},
        }

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Append keyword context as JSON."""
        if context:
            message = f"{message} | Context: {json.dumps(context, ensure_ascii=False, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_api_call(self):
        self.metrics["api_calls"] += 1

    def record_dataset(self, loaded: int, discarded: int):
        """Record how many dataset rows were kept and dropped."""
        self.metrics["records_loaded"] += loaded
        self.metrics["rows_discarded"] += discarded

    def record_match(self, kind: str):
        """Record one match outcome: 'exact', 'fuzzy' or 'none'."""
        if kind == "exact":
            self.metrics["matches_exact"] += 1
        elif kind == "fuzzy":
            self.metrics["matches_fuzzy"] += 1
        else:
            self.metrics["not_found"] += 1

    def record_error(self, error_type: str):
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics with the derived match rate."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        found = metrics_copy["matches_exact"] + metrics_copy["matches_fuzzy"]
        total = found + metrics_copy["not_found"]
        metrics_copy["match_rate"] = round(found / total, 3) if total else 0.0
        return metrics_copy

    def log_metrics_summary(self):
        metrics = self.get_metrics()
        found = metrics["matches_exact"] + metrics["matches_fuzzy"]
        total = found + metrics["not_found"]

        self.info("=== Run Metrics ===")
        self.info(f"API Calls: {metrics['api_calls']}")
        self.info(f"Dataset: {metrics['records_loaded']} records ({metrics['rows_discarded']} rows discarded)")
        self.info(
            f"Matches: {found}/{total} ({metrics['match_rate'] * 100:.1f}%) "
            f"exact={metrics['matches_exact']} fuzzy={metrics['matches_fuzzy']}"
        )

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")

    def reset_metrics(self):
        self.metrics = self._empty_metrics()


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "playletlink",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def set_level(level: str):
    """Change the level of the global logger and its console handler."""
    logger = get_logger()
    numeric = getattr(logging, level.upper())
    logger.logger.setLevel(numeric)
    for handler in logger.logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(numeric)


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
