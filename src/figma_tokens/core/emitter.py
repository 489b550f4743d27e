"""
SCSS emitter.

Renders the merged token list as SCSS variables and mixins, and writes
the stylesheet together with the JSON snapshot.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .ir import MixinProperty, Token, TokenType
from .snapshot import render_snapshot, snapshot_path_for

logger = logging.getLogger(__name__)

DEPRECATED_COMMENT = "/** @deprecated */"


def render_property(prop: MixinProperty) -> str:
    # Nested at-rules like `@include foo` take no colon
    separator = "" if prop.name.startswith("@") else ":"
    return f"  {prop.name}{separator} {prop.value};"


def render_variable(token: Token, emit_defaults: bool = False) -> str:
    suffix = " !default" if emit_defaults else ""
    return f"${token.name}: {token.value}{suffix};"


def render_mixin(token: Token) -> str:
    lines = [f"@mixin {token.name}() {{"]
    lines.extend(render_property(prop) for prop in token.value)  # type: ignore[union-attr]
    lines.append("}")
    return "\n".join(lines)


def render_token(token: Token, emit_defaults: bool = False) -> str:
    if token.type is TokenType.MIXIN:
        body = render_mixin(token)
    else:
        body = render_variable(token, emit_defaults)
    if token.deleted:
        return f"{DEPRECATED_COMMENT}\n{body}"
    return body


def render_stylesheet(tokens: list[Token], emit_defaults: bool = False) -> str:
    """
    Render tokens as an SCSS document.

    Declarations are separated by a blank line and the document ends
    with a single newline.
    """
    return "\n\n".join(render_token(token, emit_defaults) for token in tokens) + "\n"


def _temp_path(path: Path) -> Path:
    return path.with_name(f"{path.name}.tmp")


def write_outputs(
    tokens: list[Token],
    stylesheet_path: Path,
    emit_defaults: bool = False,
) -> tuple[Path, Path]:
    """
    Write the stylesheet and its snapshot.

    Both documents are rendered and written to temporary siblings first;
    the real files are replaced only once both writes have succeeded.

    Returns:
        (stylesheet path, snapshot path)
    """
    stylesheet = render_stylesheet(tokens, emit_defaults)
    snapshot = render_snapshot(tokens)
    snapshot_path = snapshot_path_for(stylesheet_path)

    stylesheet_path.parent.mkdir(parents=True, exist_ok=True)
    outputs = {snapshot_path: snapshot, stylesheet_path: stylesheet}
    try:
        for path, text in outputs.items():
            _temp_path(path).write_text(text, encoding="utf-8")
    except OSError:
        for path in outputs:
            _temp_path(path).unlink(missing_ok=True)
        raise
    for path in outputs:
        _temp_path(path).replace(path)

    logger.info("Wrote %d tokens to %s", len(tokens), stylesheet_path)
    return stylesheet_path, snapshot_path
