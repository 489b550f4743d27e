"""
Token IR types for the figma-tokens pipeline.

A Token is one generated SCSS declaration: a variable with a literal
value, or a mixin with an ordered list of properties. The same models
are persisted as the JSON snapshot between runs.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Enums
# =============================================================================


class TokenType(StrEnum):
    """Kind of SCSS declaration a token renders to."""

    VARIABLE = "variable"
    MIXIN = "mixin"


class TokenCategory(StrEnum):
    """Design node category, selected by the node name prefix."""

    COLOR = "color"
    SIZE = "size"
    SPACING = "spacing"
    BORDER = "border"
    RADIUS = "radius"
    SHADOW = "shadow"
    FONT = "font"


# Emission rank per category; ties are broken by token name
CATEGORY_ORDERING: dict[str, int] = {
    TokenCategory.COLOR: 1,
    TokenCategory.SIZE: 2,
    TokenCategory.SPACING: 3,
    TokenCategory.BORDER: 4,
    TokenCategory.RADIUS: 5,
    TokenCategory.SHADOW: 6,
    TokenCategory.FONT: 7,
}


# =============================================================================
# Models
# =============================================================================


class MixinProperty(BaseModel):
    """One `name: value` line inside a mixin body."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class Token(BaseModel):
    """A single generated declaration."""

    model_config = ConfigDict(frozen=True)

    ordering: int = Field(description="Category rank controlling emission order")
    type: TokenType
    name: str = Field(description="Slug derived from the design node name")
    value: str | int | float | list[MixinProperty]
    deleted: bool = Field(
        default=False,
        description="Carried over from a previous snapshot but missing from the current fetch",
    )

    @model_validator(mode="after")
    def check_value_matches_type(self) -> Token:
        is_list = isinstance(self.value, list)
        if self.type is TokenType.MIXIN and not is_list:
            raise ValueError(f"mixin {self.name!r} must hold a list of properties")
        if self.type is TokenType.VARIABLE and is_list:
            raise ValueError(f"variable {self.name!r} must hold a scalar value")
        return self

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.ordering, self.name)


class CategoryPrefixes(BaseModel):
    """Node name prefix configured for each category."""

    model_config = ConfigDict(frozen=True)

    color: str = "Color"
    size: str = "Size"
    spacing: str = "Spacing"
    border: str = "Stroke"
    radius: str = "Border radius"
    shadow: str = "Shadow"
    font: str = "Font"

    def lookup(self) -> dict[str, TokenCategory]:
        """Map each prefix string back to its category."""
        table: dict[str, TokenCategory] = {}
        for category in TokenCategory:
            # First category wins if two share a prefix
            table.setdefault(getattr(self, category.value), category)
        return table


def variable(category: TokenCategory, name: str, value: str | int | float) -> Token:
    """Build a variable token ranked by its category."""
    return Token(
        ordering=CATEGORY_ORDERING[category],
        type=TokenType.VARIABLE,
        name=name,
        value=value,
    )


def mixin(category: TokenCategory, name: str, properties: list[MixinProperty]) -> Token:
    """Build a mixin token ranked by its category."""
    return Token(
        ordering=CATEGORY_ORDERING[category],
        type=TokenType.MIXIN,
        name=name,
        value=properties,
    )
