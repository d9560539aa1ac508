r"""
Logging setup for the Twitch chat bridge.

Two things live here:

* colorlog formatting shared by the root logger and the event logger.
* A per-category error tally. Query and socket failures never reach the
  host as exceptions, so the tally is the only record of how often the
  bridge fell back to ``0``, ``[]`` or a reconnect.
"""

import atexit
import logging
import os
import sys
import threading
import time
from collections import Counter, defaultdict, deque
from dataclasses import dataclass, field
from typing import Any, TextIO

import colorlog

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "magenta",
}

ROOT_FORMAT = "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s"
RECENT_WINDOW_SECONDS = 3600


def debug_requested() -> bool:
    """True when the DEBUG environment variable asks for verbose output."""
    return os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")


def build_formatter(fmt: str = ROOT_FORMAT, stream: TextIO | None = None) -> colorlog.ColoredFormatter:
    """Colored formatter; escape codes are dropped when ``stream`` is not a TTY."""
    return colorlog.ColoredFormatter(
        fmt,
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors=LOG_COLORS,
        secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "magenta"}},
        reset=True,
        stream=stream,
    )


@dataclass
class ErrorOccurrence:
    timestamp: float
    message: str
    context: dict[str, Any] = field(default_factory=dict)


class ErrorAggregator:
    """Counts failures by category and keeps the latest few of each.

    ``total_count`` is exact for the life of the process; only the stored
    occurrences are capped at ``max_per_type``.
    """

    def __init__(self, max_per_type: int = 1000):
        self.max_per_type = max_per_type
        self.lock = threading.Lock()
        self._totals: Counter[str] = Counter()
        self._recent: dict[str, deque[ErrorOccurrence]] = defaultdict(
            lambda: deque(maxlen=self.max_per_type)
        )

    def record_error(self, error_type: str, message: str, context: dict[str, Any] = None) -> None:
        occurrence = ErrorOccurrence(time.time(), message, dict(context or {}))
        with self.lock:
            self._totals[error_type] += 1
            self._recent[error_type].append(occurrence)

    def occurrences(self, error_type: str) -> list[ErrorOccurrence]:
        with self.lock:
            return list(self._recent.get(error_type, ()))

    def get_error_summary(self) -> dict[str, dict[str, Any]]:
        """Per category: total, count within the last hour, and the last message."""
        now = time.time()
        with self.lock:
            summary = {}
            for error_type, total in self._totals.items():
                kept = self._recent[error_type]
                last = kept[-1] if kept else None
                summary[error_type] = {
                    "total_count": total,
                    "recent_count": sum(
                        1 for o in kept if now - o.timestamp < RECENT_WINDOW_SECONDS
                    ),
                    "last_occurrence": (
                        {"timestamp": last.timestamp, "message": last.message, "context": last.context}
                        if last
                        else None
                    ),
                }
            return summary

    def clear(self) -> None:
        with self.lock:
            self._totals.clear()
            self._recent.clear()

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            logging.info("No errors recorded in current session")
            return

        logging.warning("🚨 ERROR SUMMARY REPORT")
        for error_type, stats in sorted(summary.items()):
            logging.warning(
                f"  {error_type}: {stats['total_count']} total, "
                f"{stats['recent_count']} in last hour"
            )
            if stats["last_occurrence"]:
                logging.warning(f"    Last: {stats['last_occurrence']['message']}")


# Process-wide tally fed by log_structured_error
error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception = None,
    context: dict[str, Any] = None,
    level: int = logging.ERROR,
) -> None:
    """Log ``[TYPE] message | Exception: ... | Context: k=v`` and count it.

    Args:
        error_type: Category such as 'network', 'auth', 'query' or 'parsing'.
        message: Descriptive error message.
        exception: The exception that occurred, if any.
        context: Extra key/value pairs appended to the line.
        level: Logging level (default: ERROR).
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_aggregator.record_error(error_type, message, context)


class LoggerConfigurator:
    """Configures the root logger with colorlog output on stderr.

    Args:
        config: Optional dict. ``report_on_exit`` (default True) registers
            an error summary at interpreter exit.
    """

    def __init__(self, config=None):
        self.config = config or {}

    def configure(self) -> int:
        """Install the colored stderr handler and return the chosen level."""
        log_level = logging.DEBUG if debug_requested() else logging.INFO
        formatter = build_formatter(stream=sys.stderr)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logging.basicConfig(level=log_level, handlers=[handler], format="%(message)s")

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        for h in root_logger.handlers:
            h.setFormatter(formatter)

        # httpx logs every request at INFO
        for name in ("httpx", "httpcore"):
            logging.getLogger(name).setLevel(logging.WARNING)

        if self.config.get("report_on_exit", True):
            atexit.register(self._log_final_error_summary)
        return log_level

    def _log_final_error_summary(self):
        try:
            logging.info("📊 Final error summary before shutdown:")
            error_aggregator.log_summary_report()
        except Exception as e:
            logging.error(f"Failed to log final error summary: {e}")
