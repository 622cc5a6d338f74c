"""
swatch IR types.

All types are re-exported from this package.
"""

from .policy import DEFAULT_POLICY, ResolutionPolicy
from .tokens import (
    ColorMode,
    DocumentRole,
    DocumentSpec,
    ResolvedToken,
    SemanticType,
    TokenBranch,
    TokenLeaf,
    TokenNode,
)

__all__ = [
    "ColorMode",
    "DEFAULT_POLICY",
    "DocumentRole",
    "DocumentSpec",
    "ResolutionPolicy",
    "ResolvedToken",
    "SemanticType",
    "TokenBranch",
    "TokenLeaf",
    "TokenNode",
]
