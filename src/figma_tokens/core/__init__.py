"""
Core token pipeline: classification, formatting, diffing and emission.
"""

from .builder import build_tokens, sort_tokens
from .classifier import Classification, classify_node, classify_nodes, find_base_family
from .emitter import render_stylesheet, write_outputs
from .errors import (
    ConfigError,
    FetchError,
    FigmaTokensError,
    MalformedSnapshotError,
    PageNotFoundError,
    PromptCancelledError,
)
from .formatters import format_color, format_name, format_rgba
from .ir import CategoryPrefixes, MixinProperty, Token, TokenCategory, TokenType
from .snapshot import (
    load_snapshot,
    merge_tokens,
    parse_snapshot,
    render_snapshot,
    snapshot_path_for,
)

__all__ = [
    # IR
    "Token",
    "TokenType",
    "TokenCategory",
    "MixinProperty",
    "CategoryPrefixes",
    # Pipeline stages
    "Classification",
    "classify_node",
    "classify_nodes",
    "find_base_family",
    "format_name",
    "format_color",
    "format_rgba",
    "build_tokens",
    "sort_tokens",
    "load_snapshot",
    "parse_snapshot",
    "render_snapshot",
    "snapshot_path_for",
    "merge_tokens",
    "render_stylesheet",
    "write_outputs",
    # Errors
    "FigmaTokensError",
    "FetchError",
    "PageNotFoundError",
    "MalformedSnapshotError",
    "PromptCancelledError",
    "ConfigError",
]
