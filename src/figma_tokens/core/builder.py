"""
Token set builder.

Walks the children of a Figma page, classifies each node and turns it
into tokens through a per-category formatter, then sorts the result by
category rank and name.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from .classifier import Classification, classify_nodes, find_base_family
from .formatters import (
    font_extra_properties,
    font_line_height,
    font_properties,
    font_shorthand,
    font_size,
    font_weight,
    format_color,
    format_length,
    format_name,
    format_shadow,
)
from .ir import CategoryPrefixes, MixinProperty, Token, TokenCategory, mixin, variable

logger = logging.getLogger(__name__)

BASE_FAMILY_TOKEN = "font-family-base"

NodeValue = Callable[[dict[str, Any]], str]

VARIABLE_FORMATTERS: dict[TokenCategory, NodeValue] = {
    TokenCategory.COLOR: lambda node: format_color(node["fills"][0]),
    TokenCategory.SIZE: lambda node: format_length(node["absoluteBoundingBox"]["height"]),
    TokenCategory.SPACING: lambda node: format_length(node["absoluteBoundingBox"]["height"]),
    TokenCategory.BORDER: lambda node: format_length(node["strokeWeight"]),
    TokenCategory.RADIUS: lambda node: format_length(node["cornerRadius"]),
    TokenCategory.SHADOW: lambda node: format_shadow(node["effects"][0]),
}


def sort_tokens(tokens: Iterable[Token]) -> list[Token]:
    """Stable sort by (ordering, name)."""
    return sorted(tokens, key=lambda token: token.sort_key)


def font_mixin(name: str, style: dict[str, Any]) -> Token:
    return mixin(TokenCategory.FONT, name, font_properties(style))


def font_variable_tokens(name: str, style: dict[str, Any], base_family: str | None) -> list[Token]:
    """
    Font mixin that references one variable per font property.

    The family gets its own variable only when it differs from the base
    family; otherwise the shared base family variable is referenced.
    """
    tokens = [
        variable(TokenCategory.FONT, f"{name}-font-weight", font_weight(style)),
        variable(TokenCategory.FONT, f"{name}-font-size", font_size(style)),
        variable(TokenCategory.FONT, f"{name}-line-height", font_line_height(style)),
    ]
    family = style["fontFamily"]
    if family == base_family:
        family_ref = f"${BASE_FAMILY_TOKEN}"
    else:
        tokens.append(variable(TokenCategory.FONT, f"{name}-font-family", family))
        family_ref = f"${name}-font-family"

    # Interpolate size/line-height so Sass does not read the slash as division
    shorthand = font_shorthand(
        f"${name}-font-weight",
        f"#{{${name}-font-size}}",
        f"#{{${name}-line-height}}",
        family_ref,
    )
    properties = [MixinProperty(name="font", value=shorthand), *font_extra_properties(style)]
    tokens.append(mixin(TokenCategory.FONT, name, properties))
    return tokens


def drop_duplicate_names(tokens: Iterable[Token]) -> list[Token]:
    """Keep the first token for each name; later ones are logged and dropped."""
    seen: set[str] = set()
    unique: list[Token] = []
    for token in tokens:
        if token.name in seen:
            logger.warning("Duplicate token name %s, keeping the first one", token.name)
            continue
        seen.add(token.name)
        unique.append(token)
    return unique


def tokens_for(
    classification: Classification,
    font_variables: bool = False,
    base_family: str | None = None,
) -> list[Token]:
    """Dispatch one classified node to the formatter for its category."""
    node = classification.node
    name = format_name(node["name"])
    if classification.kind is TokenCategory.FONT:
        if font_variables:
            return font_variable_tokens(name, node["style"], base_family)
        return [font_mixin(name, node["style"])]
    value = VARIABLE_FORMATTERS[classification.kind](node)
    return [variable(classification.kind, name, value)]


def build_tokens(
    nodes: Iterable[dict[str, Any]],
    prefixes: CategoryPrefixes,
    *,
    separator: str = "/",
    font_variables: bool = False,
) -> list[Token]:
    """
    Build the sorted token set for one page.

    Args:
        nodes: Direct children of the tokens page, in document order
        prefixes: Configured prefix per category
        separator: Segment separator used in node names
        font_variables: Emit font properties as variables referenced by the mixin

    Returns:
        Tokens sorted by (ordering, name), one per name. The base family
        variable comes first, then nodes in document order, so an earlier
        node wins a name clash.
    """
    classifications = classify_nodes(nodes, prefixes, separator)

    tokens: list[Token] = []
    base_family: str | None = None
    if font_variables:
        base_family = find_base_family(classifications)
        if base_family is not None:
            tokens.append(variable(TokenCategory.FONT, BASE_FAMILY_TOKEN, base_family))

    for classification in classifications:
        tokens.extend(tokens_for(classification, font_variables, base_family))

    tokens = drop_duplicate_names(tokens)
    logger.debug("Built %d tokens from %d classified nodes", len(tokens), len(classifications))
    return sort_tokens(tokens)
