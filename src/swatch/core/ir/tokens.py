"""
Token IR types.

A token set document is parsed once into a tree of ``TokenLeaf`` and
``TokenBranch`` nodes. Flattening a Sys document produces ``ResolvedToken``
records, the unit every exporter and the UI consume.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class SemanticType(StrEnum):
    """Closed set of semantic token categories."""

    COLOR = "color"
    DIMENSION = "dimension"
    FONT_FAMILY = "fontFamily"
    FONT_WEIGHT = "fontWeight"
    FONT_SIZE = "fontSize"
    LINE_HEIGHT = "lineHeight"
    SPACING = "spacing"
    BORDER_RADIUS = "borderRadius"
    BORDER_WIDTH = "borderWidth"
    OPACITY = "opacity"
    BOX_SHADOW = "boxShadow"
    OTHER = "other"


class ColorMode(StrEnum):
    """Appearance mode a token set belongs to."""

    LIGHT = "Light"
    DARK = "Dark"


class DocumentRole(StrEnum):
    """Core documents only feed the reference map; Sys documents are also flattened."""

    CORE = "core"
    SYS = "sys"


# =============================================================================
# Document tree
# =============================================================================


class TokenLeaf(BaseModel):
    """A single design value: ``{value, type, description?}``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = "leaf"
    value: str
    type: str
    description: str | None = None


class TokenBranch(BaseModel):
    """A nested group of tokens, children kept in source order."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["branch"] = "branch"
    children: dict[str, TokenNode] = Field(default_factory=dict)


TokenNode = Annotated[TokenLeaf | TokenBranch, Field(discriminator="kind")]

TokenBranch.model_rebuild()


# =============================================================================
# Resolved output
# =============================================================================


class ResolvedToken(BaseModel):
    """A flattened, reference-free token ready for export."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    type: SemanticType
    category: str
    description: str | None = None
    mode: ColorMode | None = None

    def to_summary(self) -> dict[str, Any]:
        """JSON-serializable form for UI consumers, optional keys omitted when empty."""
        data: dict[str, Any] = {
            "name": self.name,
            "value": self.value,
            "type": self.type.value,
            "category": self.category,
        }
        if self.description:
            data["description"] = self.description
        if self.mode is not None:
            data["mode"] = self.mode.value
        return data


# =============================================================================
# Document descriptors
# =============================================================================


class DocumentSpec(BaseModel):
    """Where a token set lives and how it takes part in a load."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Token set path without extension, e.g. 'Sys/Color/Light'")
    role: DocumentRole = DocumentRole.SYS
    category: str = Field(default="", description="Category stamped on flattened tokens")
    mode: ColorMode | None = None
    required: bool = True
    prefix: str = Field(default="", description="Dotted prefix used when indexing references")
