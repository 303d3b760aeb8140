"""
Structured logging for the API client.
Provides key=value console logs and optional JSON Lines records with context.
"""

import copy
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class StructuredLogger:
    """
    Logger that outputs both human-readable and machine-parseable logs.

    Instances are meant to be injected: each client owns the logger it was
    given (or a fresh one) rather than sharing process-wide state. ``bind``
    derives a logger that stamps extra context on every event and writes to
    the same JSON file.

    Usage:
        logger = StructuredLogger("soundcloud_client.api")
        logger.bind(component="downloader").info("download_started", url=url)
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        enable_json: bool = True,
        enable_console: bool = True,
    ):
        """
        Args:
            name: Name of the underlying ``logging`` logger.
            log_dir: Directory for JSON Lines files (None = disabled).
            enable_json: Write JSON entries when a log_dir is given.
            enable_console: Forward events to the ``logging`` logger.
        """
        self.name = name
        self.enable_json = enable_json and log_dir is not None
        self.enable_console = enable_console

        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = {}
        self._owns_file = True

        self._json_file = None
        if self.enable_json:
            log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            json_log_path = log_dir / f"soundcloud_client_{timestamp}.jsonl"
            self._json_file = open(json_log_path, "a", encoding="utf-8")  # noqa: SIM115

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def bind(self, **context: Any) -> "StructuredLogger":
        """Returns a logger sharing this one's outputs with ``context`` added."""
        child = copy.copy(self)
        child._context = {**self._context, **context}
        child._owns_file = False
        return child

    def _log(self, level: int, event: str, **context) -> None:
        fields = {**self._context, **context}
        if self.enable_console:
            message = " ".join([f"[{event}]"] + [f"{k}={v}" for k, v in fields.items()])
            self._logger.log(level, message)
        if self.enable_json and self._json_file and not self._json_file.closed:
            entry = {
                "timestamp": datetime.now().isoformat(),
                "level": logging.getLevelName(level),
                "logger": self.name,
                "event": event,
                **fields,
            }
            try:
                self._json_file.write(json.dumps(entry, default=str) + "\n")
                self._json_file.flush()
            except (OSError, ValueError) as e:
                print(f"JSON logging failed: {e}", file=sys.stderr)

    def debug(self, event: str, **context) -> None:
        self._log(logging.DEBUG, event, **context)

    def info(self, event: str, **context) -> None:
        self._log(logging.INFO, event, **context)

    def warning(self, event: str, **context) -> None:
        self._log(logging.WARNING, event, **context)

    def error(self, event: str, **context) -> None:
        self._log(logging.ERROR, event, **context)

    def close(self) -> None:
        """Closes the JSON log file; bound children leave it to their parent."""
        if self._owns_file and self._json_file and not self._json_file.closed:
            self._json_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class APILogger:
    """Specialized logger for API and download events."""

    def __init__(self, logger: StructuredLogger):
        self.logger = logger

    def request_started(self, url: str, params: dict[str, Any] | None = None):
        """Log API request started."""
        self.logger.debug("api_request_started", url=url, params=params or {})

    def request_completed(self, url: str, status_code: int, duration_ms: float):
        """Log API request completed."""
        self.logger.debug(
            "api_request_completed",
            url=url,
            status_code=status_code,
            duration_ms=round(duration_ms, 2),
        )

    def request_failed(
        self, url: str, error: str, status_code: int | None = None
    ):
        """Log API request failed."""
        self.logger.error(
            "api_request_failed",
            url=url,
            status_code=status_code,
            error=error,
        )

    def download_started(self, url: str, total_bytes: int | None):
        """Log binary download started."""
        self.logger.debug("download_started", url=url, total_bytes=total_bytes)

    def download_completed(self, url: str, size: str, duration_s: float):
        """Log binary download completed."""
        self.logger.info(
            "download_completed",
            url=url,
            size=size,
            duration_s=round(duration_s, 2),
        )

    def download_failed(self, url: str, error: str, status_code: int | None = None):
        """Log binary download failed."""
        self.logger.error(
            "download_failed",
            url=url,
            status_code=status_code,
            error=error,
        )


def configure_logging(
    level: str = "INFO", console: Console | None = None
) -> logging.Logger:
    """
    Installs a Rich console handler on the package logger.

    Intended for applications embedding the client; the library itself never
    configures handlers on import.
    """
    log = logging.getLogger("soundcloud_client")
    log.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in log.handlers):
        log.addHandler(
            RichHandler(
                console=console or Console(stderr=True),
                rich_tracebacks=True,
                show_path=False,
                markup=False,
            )
        )
    return log
