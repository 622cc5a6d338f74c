"""
Built-in sample tokens.

Served when a load fails so consumers always get a small, well-typed list.
"""

from __future__ import annotations

from .ir import ResolvedToken, SemanticType


def _token(name: str, value: str, type_: SemanticType, category: str) -> ResolvedToken:
    return ResolvedToken(name=name, value=value, type=type_, category=category)


DEFAULT_TOKENS: tuple[ResolvedToken, ...] = (
    # Colors
    _token("color.primary.500", "#6366F1", SemanticType.COLOR, "color.primary"),
    _token("color.primary.600", "#4F46E5", SemanticType.COLOR, "color.primary"),
    _token("color.secondary.500", "#14B8A6", SemanticType.COLOR, "color.secondary"),
    _token("color.neutral.50", "#FAFAFA", SemanticType.COLOR, "color.neutral"),
    _token("color.neutral.900", "#171717", SemanticType.COLOR, "color.neutral"),
    # Typography
    _token(
        "typography.font.primary",
        "Inter, system-ui, sans-serif",
        SemanticType.FONT_FAMILY,
        "typography",
    ),
    _token("typography.size.xs", "12px", SemanticType.FONT_SIZE, "typography"),
    _token("typography.size.sm", "14px", SemanticType.FONT_SIZE, "typography"),
    _token("typography.size.base", "16px", SemanticType.FONT_SIZE, "typography"),
    _token("typography.size.lg", "18px", SemanticType.FONT_SIZE, "typography"),
    _token("typography.size.xl", "20px", SemanticType.FONT_SIZE, "typography"),
    _token("typography.weight.normal", "400", SemanticType.FONT_WEIGHT, "typography"),
    _token("typography.weight.medium", "500", SemanticType.FONT_WEIGHT, "typography"),
    _token("typography.weight.semibold", "600", SemanticType.FONT_WEIGHT, "typography"),
    _token("typography.weight.bold", "700", SemanticType.FONT_WEIGHT, "typography"),
    # Spacing
    _token("spacing.xs", "4px", SemanticType.SPACING, "spacing"),
    _token("spacing.sm", "8px", SemanticType.SPACING, "spacing"),
    _token("spacing.md", "16px", SemanticType.SPACING, "spacing"),
    _token("spacing.lg", "24px", SemanticType.SPACING, "spacing"),
    _token("spacing.xl", "32px", SemanticType.SPACING, "spacing"),
    # Border radius
    _token("radius.sm", "4px", SemanticType.BORDER_RADIUS, "radius"),
    _token("radius.md", "8px", SemanticType.BORDER_RADIUS, "radius"),
    _token("radius.lg", "12px", SemanticType.BORDER_RADIUS, "radius"),
    _token("radius.full", "9999px", SemanticType.BORDER_RADIUS, "radius"),
)
