"""
Semantic type classification.

Two tiers: the Token Studio ``type`` tag first, then substrings of the
dotted token name. Always returns a ``SemanticType``.
"""

from __future__ import annotations

from .ir import DEFAULT_POLICY, ResolutionPolicy, SemanticType

# Token Studio type tag -> semantic type ("dimension" comes from the policy)
SOURCE_TYPE_MAP: dict[str, SemanticType] = {
    "color": SemanticType.COLOR,
    "fontFamilies": SemanticType.FONT_FAMILY,
    "fontWeights": SemanticType.FONT_WEIGHT,
    "fontSize": SemanticType.FONT_SIZE,
    "fontSizes": SemanticType.FONT_SIZE,
    "lineHeights": SemanticType.LINE_HEIGHT,
    "spacing": SemanticType.SPACING,
    "borderRadius": SemanticType.BORDER_RADIUS,
    "borderWidth": SemanticType.BORDER_WIDTH,
    "opacity": SemanticType.OPACITY,
    "boxShadow": SemanticType.BOX_SHADOW,
    "text": SemanticType.FONT_SIZE,
    "number": SemanticType.FONT_SIZE,
}

# Name substrings checked in order; first hit wins
NAME_RULES: list[tuple[tuple[str, ...], SemanticType]] = [
    (("color", "solid", "bg"), SemanticType.COLOR),
    (("font-size", "h1", "h2", "font"), SemanticType.FONT_SIZE),
    (("weight",), SemanticType.FONT_WEIGHT),
    (("spacing", "space"), SemanticType.SPACING),
    (("radius",), SemanticType.BORDER_RADIUS),
]


def classify_name(name: str) -> SemanticType:
    """Infer a semantic type from a dotted token name alone."""
    lowered = name.lower()
    for needles, semantic_type in NAME_RULES:
        if any(needle in lowered for needle in needles):
            return semantic_type
    return SemanticType.OTHER


def classify(
    source_type: str | None,
    name: str,
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> SemanticType:
    """Map a source type tag (or, failing that, the token name) to a semantic type.

    Args:
        source_type: Token Studio ``type`` tag; may be empty or unknown.
        name: Dotted token path.
        policy: Decides what ``dimension`` maps to.

    Returns:
        Exactly one SemanticType.
    """
    if source_type == "dimension":
        return policy.dimension_type
    if source_type and source_type in SOURCE_TYPE_MAP:
        return SOURCE_TYPE_MAP[source_type]
    return classify_name(name or "")
