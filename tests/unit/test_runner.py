"""End-to-end tests for the token generation runner."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from conftest import color_node, figma_handler

from figma_tokens.api import FigmaClient
from figma_tokens.config import TokensConfig
from figma_tokens.core.errors import (
    ConfigError,
    FetchError,
    MalformedSnapshotError,
    PageNotFoundError,
    PromptCancelledError,
)
from figma_tokens.core.ir import Token
from figma_tokens.runner import TokensRunner


class RecordingProgress:
    def __init__(self) -> None:
        self.events: list[str] = []

    def start(self, message: str) -> None:
        self.events.append(f"start:{message}")

    def succeed(self) -> None:
        self.events.append("succeed")

    def fail(self) -> None:
        self.events.append("fail")


def write_snapshot(root: Path, records: list[dict]) -> Path:
    path = root / "styles" / "._tokens.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records))
    return path


LEGACY = {"ordering": 1, "type": "variable", "name": "color-legacy", "value": "#123456"}


class TestRun:
    def test_writes_stylesheet_and_snapshot(self, tmp_path, config, client_factory) -> None:
        result = TokensRunner(config, tmp_path, client_factory=client_factory).run()

        stylesheet = tmp_path / "styles" / "_tokens.scss"
        assert result.stylesheet_path == stylesheet
        assert result.snapshot_path == tmp_path / "styles" / "._tokens.json"
        text = stylesheet.read_text()
        assert text.startswith("$color-background: #ffffff;\n\n$color-primary: #ff0000;\n")
        assert "@mixin font-heading() {\n  font: 700 32px/40px Inter;\n}\n" in text
        assert result.deprecated == []
        assert len(json.loads(result.snapshot_path.read_text())) == len(result.tokens)

    def test_reports_progress(self, tmp_path, config, client_factory) -> None:
        progress = RecordingProgress()
        TokensRunner(config, tmp_path, progress=progress, client_factory=client_factory).run()
        assert progress.events == [
            "start:Fetching Figma file pages",
            "succeed",
            "start:Fetching Figma file tokens",
            "succeed",
        ]

    def test_emit_defaults(self, tmp_path, config, client_factory) -> None:
        config = config.model_copy(update={"emit_defaults": True})
        TokensRunner(config, tmp_path, client_factory=client_factory).run()
        text = (tmp_path / "styles" / "_tokens.scss").read_text()
        assert "$color-primary: #ff0000 !default;" in text

    def test_dash_separator(self, tmp_path, config) -> None:
        nodes = [color_node("Color-Primary", 1, 0, 0), color_node("Color / Other", 0, 0, 1)]
        transport = httpx.MockTransport(figma_handler(nodes))

        def factory(token: str) -> FigmaClient:
            return FigmaClient(token, transport=transport)

        config = config.model_copy(update={"separator": "-"})
        result = TokensRunner(config, tmp_path, client_factory=factory).run()

        assert [t.name for t in result.tokens] == ["color-primary"]
        assert (tmp_path / "styles" / "_tokens.scss").read_text() == "$color-primary: #ff0000;\n"

    def test_removed_token_is_deprecated(self, tmp_path, config, client_factory) -> None:
        write_snapshot(tmp_path, [LEGACY])

        result = TokensRunner(config, tmp_path, client_factory=client_factory).run()

        assert result.tokens[-1].name == "color-legacy"
        assert result.tokens[-1].deleted is True
        assert all(not t.deleted for t in result.tokens[:-1])
        text = (tmp_path / "styles" / "_tokens.scss").read_text()
        assert text.endswith("/** @deprecated */\n$color-legacy: #123456;\n")
        snapshot = json.loads(result.snapshot_path.read_text())
        assert snapshot[-1]["deleted"] is True

    def test_rejected_orphan_is_dropped(self, tmp_path, config, client_factory) -> None:
        write_snapshot(tmp_path, [LEGACY])

        def confirm(token: Token) -> bool:
            return False

        result = TokensRunner(config, tmp_path, client_factory=client_factory).run(confirm)

        assert "color-legacy" not in {t.name for t in result.tokens}
        assert "color-legacy" not in result.snapshot_path.read_text()

    def test_cancelled_prompt_writes_nothing(self, tmp_path, config, client_factory) -> None:
        snapshot = write_snapshot(tmp_path, [LEGACY])
        before = snapshot.read_text()

        def confirm(token: Token) -> bool:
            raise PromptCancelledError("cancelled")

        with pytest.raises(PromptCancelledError):
            TokensRunner(config, tmp_path, client_factory=client_factory).run(confirm)

        assert snapshot.read_text() == before
        assert not (tmp_path / "styles" / "_tokens.scss").exists()


class TestFailures:
    def test_page_not_found(self, tmp_path, config, client_factory) -> None:
        config = config.model_copy(update={"page": "Missing"})
        with pytest.raises(PageNotFoundError):
            TokensRunner(config, tmp_path, client_factory=client_factory).run()
        assert not (tmp_path / "styles").exists()

    def test_fetch_error_writes_nothing(self, tmp_path, config, page_nodes) -> None:
        transport = httpx.MockTransport(figma_handler(page_nodes))
        progress = RecordingProgress()

        def factory(token: str) -> FigmaClient:
            return FigmaClient("wrong", transport=transport)

        with pytest.raises(FetchError):
            TokensRunner(config, tmp_path, progress=progress, client_factory=factory).run()

        assert progress.events == ["start:Fetching Figma file pages", "fail"]
        assert not (tmp_path / "styles").exists()

    def test_malformed_snapshot_aborts_before_fetch(self, tmp_path, config) -> None:
        snapshot = tmp_path / "styles" / "._tokens.json"
        snapshot.parent.mkdir(parents=True)
        snapshot.write_text("{broken")

        def factory(token: str) -> FigmaClient:
            raise AssertionError("should not fetch")

        with pytest.raises(MalformedSnapshotError):
            TokensRunner(config, tmp_path, client_factory=factory).run()

        assert snapshot.read_text() == "{broken"
        assert not (tmp_path / "styles" / "_tokens.scss").exists()

    def test_missing_config(self, tmp_path, client_factory) -> None:
        with pytest.raises(ConfigError, match="token, file"):
            TokensRunner(TokensConfig(), tmp_path, client_factory=client_factory).run()
