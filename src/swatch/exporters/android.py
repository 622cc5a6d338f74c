"""
Android exporter.

Generates:
- values/design_colors.xml - light colors, uppercase hex
- values-night/design_colors.xml - dark colors (only when a dark set exists)
- values/design_dimens.xml - dp for spacing/dimension/radius/border, sp for text
- DesignTokens.kt - Jetpack Compose object with Color, dp, sp and FontWeight values
"""

from __future__ import annotations

from collections.abc import Sequence
from xml.sax.saxutils import quoteattr

from ..core.ir import ResolvedToken, SemanticType
from .base import ColorPair, DeclaredNames, Exporter, ExportResult
from .formatting import (
    format_number,
    kotlin_identifier,
    line_comment_text,
    to_camel_name,
    to_resource_name,
    xml_comment_text,
)

COMPOSE_FONT_WEIGHTS: dict[str, str] = {
    "100": "FontWeight.Thin",
    "200": "FontWeight.ExtraLight",
    "300": "FontWeight.Light",
    "400": "FontWeight.Normal",
    "500": "FontWeight.Medium",
    "600": "FontWeight.SemiBold",
    "700": "FontWeight.Bold",
    "800": "FontWeight.ExtraBold",
    "900": "FontWeight.Black",
}

DP_TYPES = (
    SemanticType.SPACING,
    SemanticType.DIMENSION,
    SemanticType.BORDER_RADIUS,
    SemanticType.BORDER_WIDTH,
)

XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>'


class AndroidExporter(Exporter):
    """XML resources plus a Compose token object."""

    name = "android"
    description = "Android XML resources (values, values-night) and Jetpack Compose tokens"
    output_formats = ["xml", "kotlin"]

    @property
    def package(self) -> str:
        return self.options.get("android_package") or "com.example.designsystem"

    def export(self, tokens: Sequence[ResolvedToken]) -> ExportResult:
        result = ExportResult(platform=self.name)
        pairs = self.color_pairs(tokens, result)

        # values/ and values-night/ declare the same resource names
        resources = DeclaredNames("values/design_colors.xml", result)
        xml_pairs = [p for p in pairs if resources.claim(p.name, to_resource_name(p.name))]

        result.add("values/design_colors.xml", "xml", self._build_colors_xml(xml_pairs, dark=False))
        if any(p.dark is not None for p in xml_pairs):
            result.add(
                "values-night/design_colors.xml",
                "xml",
                self._build_colors_xml(xml_pairs, dark=True),
            )
        result.add("values/design_dimens.xml", "xml", self._build_dimens_xml(tokens, result))
        result.add("DesignTokens.kt", "kotlin", self._build_compose(tokens, pairs, result))
        return result

    def _build_colors_xml(self, pairs: list[ColorPair], *, dark: bool) -> str:
        title = "Dark Colors" if dark else "Light Colors"
        lines = [
            XML_HEADER,
            f"<!-- Design System - {title} -->",
            "<!-- Auto-generated by swatch - Do not edit manually -->",
            "<resources>",
            "",
        ]
        for pair in pairs:
            color = pair.dark_or_light if dark else pair.light
            token = (pair.dark_token or pair.light_token) if dark else pair.light_token
            comment = pair.name
            if token.description:
                comment = f"{pair.name}: {token.description}"
            name = quoteattr(to_resource_name(pair.name))
            lines.append(f"    <!-- {xml_comment_text(comment)} -->")
            lines.append(f"    <color name={name}>{color.android_hex}</color>")
        lines += ["", "</resources>", ""]
        return "\n".join(lines)

    def _build_dimens_xml(self, tokens: Sequence[ResolvedToken], result: ExportResult) -> str:
        sections = [
            ("Spacing", (SemanticType.SPACING, SemanticType.DIMENSION), "dp"),
            ("Border Radius", (SemanticType.BORDER_RADIUS,), "dp"),
            ("Border Width", (SemanticType.BORDER_WIDTH,), "dp"),
            ("Text Sizes", (SemanticType.FONT_SIZE,), "sp"),
        ]
        names = DeclaredNames("values/design_dimens.xml", result)
        lines = [
            XML_HEADER,
            "<!-- Design System - Dimensions -->",
            "<!-- Auto-generated by swatch - Do not edit manually -->",
            "<resources>",
        ]
        for title, types, unit in sections:
            measured = self.magnitudes(self.of_type(tokens, *types), result)
            values = names.keep(measured, to_resource_name)
            if not values:
                continue
            lines += ["", f"    <!-- {title} -->"]
            for ident, _, number in values:
                lines.append(
                    f"    <dimen name={quoteattr(ident)}>{format_number(number)}{unit}</dimen>"
                )
        lines += ["", "</resources>", ""]
        return "\n".join(lines)

    def _build_compose(
        self,
        tokens: Sequence[ResolvedToken],
        pairs: list[ColorPair],
        result: ExportResult,
    ) -> str:
        names = DeclaredNames("DesignTokens.kt", result)
        colors = []
        for pair in pairs:
            ident = to_camel_name(pair.name)
            if names.claim(pair.name, f"{ident}Light", f"{ident}Dark"):
                colors.append((ident, pair))

        # Magnitudes were already validated (and warned about) by the XML pass
        silent = ExportResult(platform=self.name)
        spacing = names.keep(
            self.magnitudes(self.of_type(tokens, *DP_TYPES), silent), to_camel_name
        )
        sizes = names.keep(
            self.magnitudes(self.of_type(tokens, SemanticType.FONT_SIZE), silent), to_camel_name
        )
        weights = names.keep(self.font_weights(tokens, result, COMPOSE_FONT_WEIGHTS), to_camel_name)

        lines = [
            "// Design System - Jetpack Compose tokens",
            "// Auto-generated by swatch - Do not edit manually",
            "",
            f"package {self.package}",
            "",
            "import androidx.compose.ui.graphics.Color",
            "import androidx.compose.ui.text.font.FontWeight",
            "import androidx.compose.ui.unit.dp",
            "import androidx.compose.ui.unit.sp",
            "",
            "object DesignTokens {",
        ]

        if colors:
            lines += ["", "    // Light Colors"]
            for ident, pair in colors:
                if pair.light_token.description:
                    lines.append(f"    /** {line_comment_text(pair.light_token.description)} */")
                lines.append(f"    val {ident}Light = Color({pair.light.argb_literal})")
            lines += ["", "    // Dark Colors"]
            for ident, pair in colors:
                lines.append(f"    val {ident}Dark = Color({pair.dark_or_light.argb_literal})")

        if spacing:
            lines += ["", "    // Spacing & Shapes"]
            for ident, _, number in spacing:
                lines.append(f"    val {kotlin_identifier(ident)} = {format_number(number)}.dp")

        if sizes:
            lines += ["", "    // Text Sizes"]
            for ident, _, number in sizes:
                lines.append(f"    val {kotlin_identifier(ident)} = {format_number(number)}.sp")

        if weights:
            lines += ["", "    // Font Weights"]
            for ident, _, weight in weights:
                lines.append(f"    val {kotlin_identifier(ident)} = {weight}")

        lines += ["}", ""]
        return "\n".join(lines)
