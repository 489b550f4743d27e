"""
Rich console helpers for the figma-tokens CLI.

Styled status lines and a spinner-backed progress reporter.
"""

from __future__ import annotations

from rich.console import Console
from rich.status import Status
from rich.style import Style
from rich.text import Text

console = Console()
err_console = Console(stderr=True)

STYLES = {
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "info": Style(color="cyan"),
    "muted": Style(color="bright_black"),
}


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(Text(f"✓ {message}", style=STYLES["success"]))


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(Text(f"✗ {message}", style=STYLES["error"]))


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(Text(f"⚠ {message}", style=STYLES["warning"]))


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(Text(f"ℹ {message}", style=STYLES["info"]))


class RichProgress:
    """Spinner that resolves into a ✓ or ✗ line per step."""

    def __init__(self, target: Console | None = None):
        self.console = target or console
        self._status: Status | None = None
        self._message = ""

    def start(self, message: str) -> None:
        self._stop()
        self._message = message
        self._status = self.console.status(message)
        self._status.start()

    def succeed(self) -> None:
        self._stop()
        self.console.print(Text(f"✓ {self._message}", style=STYLES["success"]))

    def fail(self) -> None:
        self._stop()
        self.console.print(Text(f"✗ {self._message}", style=STYLES["error"]))

    def _stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
