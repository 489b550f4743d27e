"""Shared pytest fixtures for figma-tokens tests."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from figma_tokens.api import FigmaClient
from figma_tokens.config import TokensConfig
from figma_tokens.core.ir import CategoryPrefixes

PAGE_ID = "1:2"


def color_node(name: str, r: float, g: float, b: float, a: float = 1.0, **fill: Any) -> dict:
    return {
        "id": f"c-{name}",
        "name": name,
        "fills": [{"type": "SOLID", "color": {"r": r, "g": g, "b": b, "a": a}, **fill}],
    }


def box_node(name: str, height: float) -> dict:
    return {"id": f"b-{name}", "name": name, "absoluteBoundingBox": {"height": height}}


def font_node(name: str, family: str = "Inter", **style: Any) -> dict:
    base = {
        "fontFamily": family,
        "fontWeight": 400,
        "fontSize": 16,
        "lineHeightPx": 24,
        "letterSpacing": 0,
    }
    base.update(style)
    return {"id": f"f-{name}", "name": name, "style": base}


@pytest.fixture
def prefixes() -> CategoryPrefixes:
    """Default prefix table."""
    return CategoryPrefixes()


@pytest.fixture
def page_nodes() -> list[dict]:
    """Children of a typical tokens page, in document order."""
    return [
        font_node("Font / Heading", fontWeight=700, fontSize=32, lineHeightPx=40),
        color_node("Color / Primary", 1, 0, 0),
        {"id": "x", "name": "Illustration / Hero"},
        box_node("Spacing / Large", 24),
        box_node("Size / Icon", 16),
        {"id": "s", "name": "Stroke / Thin", "strokeWeight": 1},
        {"id": "r", "name": "Border radius / Small", "cornerRadius": 4},
        {
            "id": "sh",
            "name": "Shadow / Card",
            "effects": [
                {
                    "type": "DROP_SHADOW",
                    "offset": {"x": 0, "y": 2},
                    "radius": 8,
                    "color": {"r": 0, "g": 0, "b": 0, "a": 0.25},
                }
            ],
        },
        color_node("Color / Background", 1, 1, 1),
    ]


@pytest.fixture
def config() -> TokensConfig:
    return TokensConfig(
        token="secret",
        file="FILE123",
        page="Tokens",
        tokens_file_path="styles/_tokens.scss",
    )


def figma_handler(page_nodes: list[dict], page_name: str = "Tokens", requests: list | None = None):
    """Build a MockTransport handler serving a single-page Figma file."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if request.headers.get("X-Figma-Token") != "secret":
            return httpx.Response(403, json={"status": 403, "err": "Invalid token"})
        if request.url.params.get("ids"):
            page = {"id": PAGE_ID, "name": page_name, "children": page_nodes}
        else:
            page = {"id": PAGE_ID, "name": page_name}
        return httpx.Response(200, json={"name": "Design", "document": {"children": [page]}})

    return handler


@pytest.fixture
def client_factory(page_nodes: list[dict]):
    """Factory producing FigmaClients backed by a mock transport."""
    transport = httpx.MockTransport(figma_handler(page_nodes))

    def factory(token: str) -> FigmaClient:
        return FigmaClient(token, transport=transport)

    return factory
