"""
Figma REST API client.

Thin wrapper over httpx for the one endpoint the pipeline needs:
`GET /files/{file_id}`, optionally limited by depth and node ids.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from .core.errors import FetchError, PageNotFoundError

logger = logging.getLogger(__name__)

FIGMA_API_BASE = "https://api.figma.com/v1"

_STATUS_HINTS = {
    401: "Invalid Figma API token.",
    403: "Access denied. Check the token and that it can view this file.",
    404: "File or node not found. Check the file id.",
    429: "Rate limit exceeded. Wait before retrying.",
}


def _describe_status_error(e: httpx.HTTPStatusError) -> str:
    status = e.response.status_code
    message = _STATUS_HINTS.get(status, f"Figma API returned status {status}")
    try:
        body = e.response.json()
    except ValueError:
        return message
    if isinstance(body, dict) and body.get("err"):
        return f"{message} ({body['err']})"
    return message


class FigmaClient:
    """HTTP client for the Figma files API."""

    def __init__(
        self,
        token: str,
        base_url: str = FIGMA_API_BASE,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"X-Figma-Token": token, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> FigmaClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_file(
        self,
        file_id: str,
        depth: int | None = None,
        ids: Iterable[str] | None = None,
    ) -> dict[str, Any]:
        """
        Fetch a file's document tree.

        Args:
            file_id: Figma file key
            depth: How deep into the document tree to traverse
            ids: Restrict the tree to these node ids

        Returns:
            Decoded JSON response with a `document` root

        Raises:
            FetchError: On transport failures, error statuses or non-JSON bodies
        """
        params: dict[str, Any] = {}
        if depth is not None:
            params["depth"] = depth
        if ids:
            params["ids"] = ",".join(ids)

        logger.info("Fetching Figma file %s %s", file_id, params or "")
        try:
            response = self.client.get(f"/files/{file_id}", params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(_describe_status_error(e)) from e
        except httpx.TimeoutException as e:
            raise FetchError("Request to the Figma API timed out.", str(e)) from e
        except httpx.HTTPError as e:
            raise FetchError("Could not reach the Figma API.", str(e)) from e

        try:
            return response.json()
        except ValueError as e:
            raise FetchError("Figma API returned a response that is not JSON.", str(e)) from e


def find_page(document: dict[str, Any], page_name: str) -> dict[str, Any]:
    """Find a top-level page (canvas) by name."""
    for page in document.get("children", []):
        if page.get("name") == page_name:
            return page
    raise PageNotFoundError(page_name)


def page_children(document: dict[str, Any], page: dict[str, Any]) -> list[dict[str, Any]]:
    """Direct children of `page` within a document fetched by page id."""
    for child in document.get("children", []):
        if child.get("id") == page["id"]:
            return child.get("children", [])
    raise PageNotFoundError(page["name"])
