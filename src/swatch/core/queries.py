"""
Read-only queries over a resolved token list.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .ir import ColorMode, ResolvedToken, SemanticType

TYPOGRAPHY_TYPES = frozenset(
    {
        SemanticType.FONT_FAMILY,
        SemanticType.FONT_SIZE,
        SemanticType.FONT_WEIGHT,
        SemanticType.LINE_HEIGHT,
    }
)


def group_by_type(tokens: Iterable[ResolvedToken]) -> dict[str, list[ResolvedToken]]:
    """Group tokens by semantic type; first-seen type order is kept."""
    groups: dict[str, list[ResolvedToken]] = {}
    for token in tokens:
        groups.setdefault(token.type.value, []).append(token)
    return groups


def group_by_category(tokens: Iterable[ResolvedToken]) -> dict[str, list[ResolvedToken]]:
    groups: dict[str, list[ResolvedToken]] = {}
    for token in tokens:
        groups.setdefault(token.category, []).append(token)
    return groups


def filter_tokens(
    tokens: Iterable[ResolvedToken],
    *,
    type: SemanticType | str | None = None,
    mode: ColorMode | str | None = None,
    category: str | None = None,
) -> list[ResolvedToken]:
    """Filter by exact type and mode, and by case-insensitive category substring."""
    wanted_type = SemanticType(type) if type is not None else None
    wanted_mode = ColorMode(mode) if mode is not None else None
    result = []
    for token in tokens:
        if wanted_type is not None and token.type is not wanted_type:
            continue
        if wanted_mode is not None and token.mode is not wanted_mode:
            continue
        if category is not None and category.lower() not in token.category.lower():
            continue
        result.append(token)
    return result


def search_tokens(tokens: Iterable[ResolvedToken], query: str) -> list[ResolvedToken]:
    """Case-insensitive match on name, value or description."""
    needle = query.lower()
    return [
        t
        for t in tokens
        if needle in t.name.lower()
        or needle in t.value.lower()
        or (t.description is not None and needle in t.description.lower())
    ]


def find_token(
    tokens: Iterable[ResolvedToken],
    name: str,
    mode: ColorMode | str | None = None,
) -> ResolvedToken | None:
    """First token with this name (and mode, when given)."""
    wanted_mode = ColorMode(mode) if mode is not None else None
    for token in tokens:
        if token.name == name and (wanted_mode is None or token.mode is wanted_mode):
            return token
    return None


def summarize(tokens: Iterable[ResolvedToken]) -> list[dict[str, Any]]:
    """JSON list for UI consumers."""
    return [t.to_summary() for t in tokens]


def token_stats(tokens: Iterable[ResolvedToken]) -> dict[str, Any]:
    """Counts per broad family, plus per-mode color counts.

    ``colors`` counts light and dark variants separately.
    """
    tokens = list(tokens)
    colors = [t for t in tokens if t.type is SemanticType.COLOR]
    return {
        "total": len(tokens),
        "colors": len(colors),
        "typography": sum(1 for t in tokens if t.type in TYPOGRAPHY_TYPES),
        "spacing": sum(
            1 for t in tokens if t.type in (SemanticType.SPACING, SemanticType.DIMENSION)
        ),
        "borderRadius": sum(1 for t in tokens if t.type is SemanticType.BORDER_RADIUS),
        "modes": {
            mode.value: sum(1 for t in colors if t.mode is mode) for mode in ColorMode
        },
        "types": {name: len(group) for name, group in group_by_type(tokens).items()},
    }
