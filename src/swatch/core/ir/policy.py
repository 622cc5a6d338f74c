"""
Resolution policy.

Token exports in the wild disagree on how aggressive the reference
fallback should be and whether ``dimension`` is its own type or a spacing
value, so both are knobs rather than constants.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .tokens import SemanticType


class ResolutionPolicy(BaseModel):
    """Knobs for reference resolution and type classification."""

    model_config = ConfigDict(frozen=True)

    fallback_segments: int = Field(
        default=2,
        ge=0,
        description="Retry a missing reference with its last N path segments (0 disables)",
    )
    max_depth: int = Field(
        default=32,
        ge=1,
        le=1000,
        description="Maximum reference hops before a chain is treated as a cycle",
    )
    dimension_type: SemanticType = Field(
        default=SemanticType.SPACING,
        description="Semantic type assigned to source type 'dimension'",
    )


DEFAULT_POLICY = ResolutionPolicy()
