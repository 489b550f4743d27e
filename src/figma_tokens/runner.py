"""
Token generation runner - orchestrates one pipeline run.

fetch page nodes -> build sorted tokens -> merge with snapshot -> write files

Nothing is written until every earlier stage, including any
keep/discard prompts, has completed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, TypeVar

from .api import FigmaClient, find_page, page_children
from .config import TokensConfig, missing_fields
from .core.builder import build_tokens
from .core.emitter import write_outputs
from .core.errors import ConfigError
from .core.ir import Token
from .core.snapshot import ConfirmOrphan, load_snapshot, merge_tokens, snapshot_path_for

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgressReporter(Protocol):
    """Status display for long-running steps."""

    def start(self, message: str) -> None: ...

    def succeed(self) -> None: ...

    def fail(self) -> None: ...


class NullProgress:
    """Progress reporter that displays nothing."""

    def start(self, message: str) -> None:
        logger.debug(message)

    def succeed(self) -> None:
        pass

    def fail(self) -> None:
        pass


@dataclass
class RunResult:
    """Outcome of a run."""

    tokens: list[Token] = field(default_factory=list)
    stylesheet_path: Path | None = None
    snapshot_path: Path | None = None

    @property
    def deprecated(self) -> list[Token]:
        return [token for token in self.tokens if token.deleted]

    @property
    def live(self) -> list[Token]:
        return [token for token in self.tokens if not token.deleted]


class TokensRunner:
    """
    Runs the fetch/build/merge/emit pipeline for one configuration.
    """

    def __init__(
        self,
        config: TokensConfig,
        root: Path,
        progress: ProgressReporter | None = None,
        client_factory: Callable[[str], FigmaClient] | None = None,
    ):
        """
        Initialize the runner.

        Args:
            config: Validated run configuration
            root: Directory that relative output paths resolve against
            progress: Status display (silent if not provided)
            client_factory: Builds a Figma client from the API token
        """
        self.config = config
        self.root = root
        self.progress = progress or NullProgress()
        self.client_factory = client_factory or FigmaClient
        self.stylesheet_path = config.get_tokens_path(root)
        self.snapshot_path = snapshot_path_for(self.stylesheet_path)

    def _step(self, message: str, action: Callable[[], T]) -> T:
        self.progress.start(message)
        try:
            result = action()
        except Exception:
            self.progress.fail()
            raise
        self.progress.succeed()
        return result

    def fetch_nodes(self) -> list[dict]:
        """
        Fetch the direct children of the configured page.

        Lists pages with a shallow request first, then fetches only the
        matching page two levels deep.
        """
        file_id = self.config.file
        with self.client_factory(self.config.token) as client:
            pages = self._step(
                "Fetching Figma file pages",
                lambda: client.get_file(file_id, depth=1),
            )
            page = find_page(pages["document"], self.config.page)
            page_data = self._step(
                "Fetching Figma file tokens",
                lambda: client.get_file(file_id, depth=2, ids=[page["id"]]),
            )
        return page_children(page_data["document"], page)

    def build(self, nodes: list[dict]) -> list[Token]:
        return build_tokens(
            nodes,
            self.config.prefixes(),
            separator=self.config.separator,
            font_variables=self.config.font_variables,
        )

    def run(self, confirm: ConfirmOrphan | None = None) -> RunResult:
        """
        Run the pipeline once.

        Args:
            confirm: Asked per deprecated token whether to keep it; all
                deprecated tokens are kept when omitted

        Returns:
            RunResult with the merged tokens and written paths
        """
        missing = missing_fields(self.config)
        if missing:
            raise ConfigError("Missing configuration values: " + ", ".join(missing))

        # Read the snapshot first so a corrupt file aborts before any request
        previous = load_snapshot(self.snapshot_path)

        nodes = self.fetch_nodes()
        tokens = self.build(nodes)
        logger.info("Built %d tokens from %d nodes", len(tokens), len(nodes))

        merged = merge_tokens(tokens, previous, confirm)

        stylesheet_path, snapshot_path = write_outputs(
            merged, self.stylesheet_path, self.config.emit_defaults
        )
        return RunResult(
            tokens=merged,
            stylesheet_path=stylesheet_path,
            snapshot_path=snapshot_path,
        )
