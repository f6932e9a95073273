"""Callback-based logging shared by adapters and the controller.

The app installs a callback that writes into its debug console; without one,
logging is a no-op.
"""

from __future__ import annotations

from typing import Callable

LogCallback = Callable[[str, str], None]


class LogMixin:
    # Prefix shown in front of every message, e.g. "[HAM]"
    log_name: str = "APP"

    # Logging callback - set by app to integrate with UI logging
    _log_callback: LogCallback | None = None

    def set_logger(self, callback: LogCallback | None) -> None:
        """Set logging callback. Signature: callback(level, message)."""
        self._log_callback = callback

    def _log(self, level: str, message: str) -> None:
        """Log a message if callback is set."""
        if self._log_callback:
            self._log_callback(level, f"[{self.log_name}] {message}")

    def _log_info(self, message: str) -> None:
        self._log("INFO", message)

    def _log_warning(self, message: str) -> None:
        self._log("WARN", message)

    def _log_error(self, message: str) -> None:
        self._log("ERROR", message)
