"""
iOS exporter.

Generates Swift sources:
- DesignSystemColors.swift - adaptive UIColor (dark falls back to light) + SwiftUI Color
- DesignSystemTypography.swift - CGFloat sizes, UIFont.Weight constants, font families
- DesignSystemSpacing.swift - spacing, dimension, radius and border width CGFloats
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.ir import ResolvedToken, SemanticType
from .base import DeclaredNames, Exporter, ExportResult
from .formatting import format_number, line_comment_text, swift_identifier, to_camel_name

HEADER = [
    "// Auto-generated by swatch - Do not edit manually",
    "",
    "import UIKit",
    "",
]

SWIFT_FONT_WEIGHTS: dict[str, str] = {
    "100": ".ultraLight",
    "200": ".thin",
    "300": ".light",
    "400": ".regular",
    "500": ".medium",
    "600": ".semibold",
    "700": ".bold",
    "800": ".heavy",
    "900": ".black",
}


def _swift_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _constant(ident: str, declaration: str) -> str:
    return f"    public static let {swift_identifier(ident)}{declaration}"


class IOSExporter(Exporter):
    """Swift output for UIKit and SwiftUI."""

    name = "ios"
    description = "Swift UIColor/UIFont/CGFloat constants with dark mode support"
    output_formats = ["swift"]

    def export(self, tokens: Sequence[ResolvedToken]) -> ExportResult:
        result = ExportResult(platform=self.name)
        result.add("DesignSystemColors.swift", "swift", self._build_colors(tokens, result))
        result.add("DesignSystemTypography.swift", "swift", self._build_typography(tokens, result))
        result.add("DesignSystemSpacing.swift", "swift", self._build_spacing(tokens, result))
        return result

    def _build_colors(self, tokens: Sequence[ResolvedToken], result: ExportResult) -> str:
        names = DeclaredNames("DesignSystemColors.swift", result)
        declared = []
        for pair in self.color_pairs(tokens, result):
            ident = to_camel_name(pair.name)
            if names.claim(pair.name, ident):
                declared.append((swift_identifier(ident), pair))

        lines = ["// Design System Colors", *HEADER]
        lines += ["extension UIColor {", "", "    // MARK: - Design System Colors", ""]

        for ident, pair in declared:
            dark = pair.dark_or_light
            lr, lg, lb, la = pair.light.unit_components()
            dr, dg, db, da = dark.unit_components()
            if pair.light_token.description:
                lines.append(f"    /// {line_comment_text(pair.light_token.description)}")
            lines += [
                f"    /// {pair.name} - Light: {pair.light.hex} | Dark: {dark.hex}",
                f"    static let {ident} = UIColor {{ traitCollection in",
                "        return traitCollection.userInterfaceStyle == .dark",
                f"            ? UIColor(red: {dr}, green: {dg}, blue: {db}, alpha: {da})",
                f"            : UIColor(red: {lr}, green: {lg}, blue: {lb}, alpha: {la})",
                "    }",
                "",
            ]

        lines += [
            "}",
            "",
            "// MARK: - SwiftUI Support",
            "#if canImport(SwiftUI)",
            "import SwiftUI",
            "",
            "@available(iOS 13.0, *)",
            "extension Color {",
            "",
        ]
        for ident, _ in declared:
            lines.append(f"    static let {ident} = Color(UIColor.{ident})")
        lines += ["", "}", "#endif", ""]
        return "\n".join(lines)

    def _build_typography(self, tokens: Sequence[ResolvedToken], result: ExportResult) -> str:
        names = DeclaredNames("DesignSystemTypography.swift", result)
        sizes = names.keep(
            self.magnitudes(self.of_type(tokens, SemanticType.FONT_SIZE), result), to_camel_name
        )
        line_heights = names.keep(
            self.magnitudes(self.of_type(tokens, SemanticType.LINE_HEIGHT), result), to_camel_name
        )
        weights = names.keep(self.font_weights(tokens, result, SWIFT_FONT_WEIGHTS), to_camel_name)
        families = names.keep(
            ((t, t.value) for t in self.of_type(tokens, SemanticType.FONT_FAMILY)), to_camel_name
        )

        lines = ["// Design System Typography", *HEADER]
        lines += ["public struct DesignSystemTypography {", "", "    // MARK: - Font Sizes", ""]
        for ident, token, size in sizes:
            lines.append(f"    /// {token.name}")
            lines.append(_constant(ident, f": CGFloat = {format_number(size)}"))

        if line_heights:
            lines += ["", "    // MARK: - Line Heights", ""]
            for ident, _, height in line_heights:
                lines.append(_constant(ident, f": CGFloat = {format_number(height)}"))

        if weights:
            lines += ["", "    // MARK: - Font Weights", ""]
            for ident, _, weight in weights:
                lines.append(_constant(ident, f": UIFont.Weight = {weight}"))

        if families:
            lines += ["", "    // MARK: - Font Families", ""]
            for ident, _, family in families:
                lines.append(_constant(ident, f" = {_swift_string(family)}"))

        lines += [
            "",
            "    /// System font at a design system size",
            "    public static func systemFont(size: CGFloat, weight: UIFont.Weight = .regular) -> UIFont {",
            "        return UIFont.systemFont(ofSize: size, weight: weight)",
            "    }",
            "}",
            "",
            "// MARK: - SwiftUI Support",
            "#if canImport(SwiftUI)",
            "import SwiftUI",
            "",
            "@available(iOS 13.0, *)",
            "extension Font {",
            "",
        ]
        for ident, _, _ in sizes:
            quoted = swift_identifier(ident)
            lines.append(
                f"    static let {quoted} = Font.system(size: DesignSystemTypography.{quoted})"
            )
        lines += ["", "}", "#endif", ""]
        return "\n".join(lines)

    def _build_spacing(self, tokens: Sequence[ResolvedToken], result: ExportResult) -> str:
        sections = [
            ("Spacing", (SemanticType.SPACING, SemanticType.DIMENSION)),
            ("Border Radius", (SemanticType.BORDER_RADIUS,)),
            ("Border Width", (SemanticType.BORDER_WIDTH,)),
        ]
        names = DeclaredNames("DesignSystemSpacing.swift", result)
        lines = ["// Design System Spacing", *HEADER, "public struct DesignSystemSpacing {"]
        for title, types in sections:
            measured = self.magnitudes(self.of_type(tokens, *types), result)
            values = names.keep(measured, to_camel_name)
            if not values:
                continue
            lines += ["", f"    // MARK: - {title}", ""]
            for ident, token, number in values:
                lines.append(f"    /// {token.name}")
                lines.append(_constant(ident, f": CGFloat = {format_number(number)}"))
        lines += [
            "}",
            "",
            "// MARK: - UIEdgeInsets Helpers",
            "extension UIEdgeInsets {",
            "",
            "    public static func all(_ value: CGFloat) -> UIEdgeInsets {",
            "        return UIEdgeInsets(top: value, left: value, bottom: value, right: value)",
            "    }",
            "",
            "    public static func horizontal(_ value: CGFloat) -> UIEdgeInsets {",
            "        return UIEdgeInsets(top: 0, left: value, bottom: 0, right: value)",
            "    }",
            "",
            "    public static func vertical(_ value: CGFloat) -> UIEdgeInsets {",
            "        return UIEdgeInsets(top: value, left: 0, bottom: value, right: 0)",
            "    }",
            "}",
            "",
        ]
        return "\n".join(lines)
