"""
Snapshot persistence and diffing.

The snapshot is a JSON array of every token written by the previous
run. Tokens that have since disappeared from the design file are
carried forward as deprecated instead of being silently dropped.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .errors import MalformedSnapshotError
from .ir import Token

logger = logging.getLogger(__name__)

_TOKEN_LIST = TypeAdapter(list[Token])

# Returns True to keep an orphaned token; may raise PromptCancelledError
ConfirmOrphan = Callable[[Token], bool]


# =============================================================================
# Path helpers
# =============================================================================


def snapshot_path_for(stylesheet_path: Path) -> Path:
    """`styles/_tokens.scss` -> `styles/._tokens.json`"""
    return stylesheet_path.parent / f".{stylesheet_path.stem}.json"


# =============================================================================
# Serialization
# =============================================================================


def render_snapshot(tokens: list[Token]) -> str:
    """Serialize tokens, including their deleted flags, as indented JSON."""
    return json.dumps([token.model_dump(mode="json") for token in tokens], indent=2)


def parse_snapshot(text: str) -> list[Token]:
    """
    Parse snapshot JSON into tokens.

    Raises:
        MalformedSnapshotError: If the text is not a JSON array of token records
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSnapshotError("Snapshot is not valid JSON", str(e)) from e
    if not isinstance(data, list):
        raise MalformedSnapshotError("Snapshot must be a JSON array of tokens")
    try:
        return _TOKEN_LIST.validate_python(data)
    except ValidationError as e:
        raise MalformedSnapshotError("Snapshot contains invalid token records", str(e)) from e


def load_snapshot(path: Path) -> list[Token] | None:
    """Load the previous run's tokens, or None when there is no snapshot yet."""
    if not path.exists():
        logger.debug("No snapshot at %s", path)
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedSnapshotError(f"Cannot read snapshot {path}", str(e)) from e
    try:
        return parse_snapshot(text)
    except MalformedSnapshotError as e:
        raise MalformedSnapshotError(f"Malformed snapshot {path}: {e.message}", e.detail) from e


# =============================================================================
# Diffing
# =============================================================================


def find_orphans(new_tokens: list[Token], previous: list[Token]) -> list[Token]:
    """Previous tokens whose names are gone from the new set, tagged deleted."""
    live_names = {token.name for token in new_tokens}
    return [
        token.model_copy(update={"deleted": True})
        for token in previous
        if token.name not in live_names
    ]


def merge_tokens(
    new_tokens: list[Token],
    previous: list[Token] | None,
    confirm: ConfirmOrphan | None = None,
) -> list[Token]:
    """
    Merge the fresh token set with the previous snapshot.

    Args:
        new_tokens: Sorted tokens from the current fetch
        previous: Tokens from the snapshot, or None on the first run
        confirm: Asked once per orphan whether to keep it; all orphans
            are kept when omitted

    Returns:
        New tokens in their order, followed by surviving orphans in
        snapshot order
    """
    if previous is None:
        return list(new_tokens)

    orphans = find_orphans(new_tokens, previous)
    if confirm is not None:
        orphans = [token for token in orphans if confirm(token)]

    logger.debug("Merged %d live tokens with %d deprecated tokens", len(new_tokens), len(orphans))
    return [*new_tokens, *orphans]
