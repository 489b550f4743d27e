"""
Error types for figma-tokens fetching, diffing, and emitting.

Every error is fatal at the top level: the CLI reports the message and
exits without touching the output files.
"""

from __future__ import annotations


class FigmaTokensError(Exception):
    """Base exception for all figma-tokens errors."""

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with detail if available."""
        if self.detail:
            return f"{self.message}\n{self.detail}"
        return self.message


class FetchError(FigmaTokensError):
    """
    Raised when the Figma API cannot be reached or rejects the request.

    Examples:
    - Invalid or expired personal access token
    - Unknown file id
    - Connection failures and timeouts
    - Response body that is not JSON
    """

    pass


class PageNotFoundError(FigmaTokensError):
    """Raised when the configured page name is not present in the file."""

    def __init__(self, page_name: str):
        self.page_name = page_name
        super().__init__(f"Page {page_name} not found")


class MalformedSnapshotError(FigmaTokensError):
    """
    Raised when the snapshot from a previous run cannot be parsed.

    The run aborts instead of overwriting the snapshot, so deprecated
    tokens are never lost to a corrupt file.
    """

    pass


class PromptCancelledError(FigmaTokensError):
    """Raised when the user aborts an interactive prompt."""

    pass


class ConfigError(FigmaTokensError):
    """Raised when the configuration file cannot be read."""

    pass
