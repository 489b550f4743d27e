"""
Node classifier.

Matches the first segment of a Figma node name against the configured
category prefixes. Each node lands in at most one category; nodes
without a matching prefix are skipped.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .ir import CategoryPrefixes, TokenCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    """A design node tagged with the category its prefix selected."""

    kind: TokenCategory
    node: dict[str, Any]


def name_prefix(name: str, separator: str = "/") -> str:
    """Return the trimmed first segment of a node name."""
    return name.split(separator, 1)[0].strip()


def classify_node(
    node: dict[str, Any],
    prefixes: CategoryPrefixes,
    separator: str = "/",
    table: dict[str, TokenCategory] | None = None,
) -> Classification | None:
    """
    Classify a single node by its name prefix.

    Args:
        node: Figma node dict (only `name` is read here)
        prefixes: Configured prefix per category
        separator: Segment separator used in node names
        table: Precomputed `prefixes.lookup()`, to avoid rebuilding it per node

    Returns:
        Classification, or None when no prefix matches
    """
    lookup = table if table is not None else prefixes.lookup()
    kind = lookup.get(name_prefix(node["name"], separator))
    if kind is None:
        return None
    return Classification(kind=kind, node=node)


def classify_nodes(
    nodes: Iterable[dict[str, Any]],
    prefixes: CategoryPrefixes,
    separator: str = "/",
) -> list[Classification]:
    """Classify nodes in document order, dropping unmatched ones."""
    table = prefixes.lookup()
    results: list[Classification] = []
    skipped = 0
    for node in nodes:
        classification = classify_node(node, prefixes, separator, table)
        if classification is None:
            skipped += 1
            continue
        results.append(classification)
    logger.debug("Classified %d nodes, skipped %d", len(results), skipped)
    return results


def find_base_family(classifications: Iterable[Classification]) -> str | None:
    """
    Most frequently used font family among font nodes.

    Ties go to the family encountered first.
    """
    counts = Counter(
        c.node["style"]["fontFamily"] for c in classifications if c.kind is TokenCategory.FONT
    )
    if not counts:
        return None
    # Counter preserves insertion order and max() keeps the first maximum
    return max(counts, key=lambda family: counts[family])
