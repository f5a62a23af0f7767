"""Log levels, the engine's logging callback type and a rich-backed sink."""

from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape


class LogLevel(str, Enum):
    """Severity attached to every engine log line."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


LogCallback = Callable[[LogLevel, str], None]


def null_logger(level: LogLevel, message: str) -> None:
    """Discard a log line."""


class SyncLogger:
    """Rich console sink for engine log lines.

    Instances are callable with ``(level, message)`` and can be handed to the
    engine directly as its logging callback.
    """

    _STYLES = {
        LogLevel.INFO: ("blue", "ℹ"),
        LogLevel.WARN: ("yellow", "⚠"),
        LogLevel.ERROR: ("red", "✗"),
    }

    def __init__(
        self,
        console: Optional[Console] = None,
        verbose: bool = False,
        log_file: Optional[Path] = None,
    ):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Show INFO lines as well as warnings and errors
            log_file: Optional file that receives every line with a timestamp
        """
        self.console = console or Console()
        self.verbose = verbose
        self.log_file = log_file
        self.entries: list[tuple[LogLevel, str]] = []

    def __call__(self, level: LogLevel, message: str) -> None:
        self.entries.append((level, message))
        self._append_to_file(level, message)

        if level == LogLevel.INFO and not self.verbose:
            return
        color, icon = self._STYLES[level]
        self.console.print(f"[{color}]{icon}[/{color}] {escape(message)}")

    def _append_to_file(self, level: LogLevel, message: str) -> None:
        if self.log_file is None:
            return
        timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"[{timestamp}] [{level.value}] {message}\n")
        except OSError as e:
            failed_path = self.log_file
            self.log_file = None
            self.console.print(
                f"[yellow]⚠[/yellow] Log file disabled ({escape(str(failed_path))}): {escape(str(e))}"
            )
