"""
Web exporter.

Generates:
- tokens.json - UI summary list
- tokens.css - custom properties, px units, dark overrides under prefers-color-scheme
- index.html - browsable catalogue grouped by category (Jinja2)
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.ir import ColorMode, ResolvedToken, SemanticType
from ..core.queries import group_by_category, summarize, token_stats
from .base import Exporter, ExportResult
from .formatting import format_number, parse_hex_color, parse_magnitude, to_css_name

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

PX_TYPES = frozenset(
    {
        SemanticType.SPACING,
        SemanticType.DIMENSION,
        SemanticType.BORDER_RADIUS,
        SemanticType.BORDER_WIDTH,
        SemanticType.FONT_SIZE,
    }
)


def css_value(token: ResolvedToken) -> str | None:
    """CSS value for a token, or None when it cannot be expressed."""
    if token.type is SemanticType.COLOR:
        color = parse_hex_color(token.value)
        if color is None:
            return None
        return color.hex if color.opaque else f"{color.hex}{color.alpha:02X}"
    if token.type in PX_TYPES:
        number = parse_magnitude(token.value)
        if number is None:
            return None
        return "0" if number == 0 else f"{format_number(number)}px"
    if token.value.startswith("{"):
        return None
    return token.value


def create_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["css_name"] = to_css_name
    env.filters["css_value"] = css_value
    return env


class WebExporter(Exporter):
    """JSON, CSS and an HTML catalogue."""

    name = "web"
    description = "tokens.json, CSS custom properties and a browsable HTML catalogue"
    output_formats = ["json", "css", "html"]

    @property
    def title(self) -> str:
        return self.options.get("title") or "Design Tokens"

    def export(self, tokens: Sequence[ResolvedToken]) -> ExportResult:
        result = ExportResult(platform=self.name)
        result.add("tokens.json", "json", json.dumps(summarize(tokens), indent=2) + "\n")
        result.add("tokens.css", "css", self._build_css(tokens, result))
        result.add("index.html", "html", self._build_catalogue(tokens))
        return result

    def _build_css(self, tokens: Sequence[ResolvedToken], result: ExportResult) -> str:
        light: list[str] = []
        dark: list[str] = []
        for token in tokens:
            value = css_value(token)
            if value is None:
                result.add_warning(f"{token.name}: no CSS form for {token.value!r}, skipped")
                continue
            line = f"  {to_css_name(token.name)}: {value};"
            if token.mode is ColorMode.DARK:
                dark.append("  " + line)
            else:
                light.append(line)

        lines = ["/* Auto-generated by swatch - Do not edit manually */", "", ":root {"]
        lines += light
        lines.append("}")
        if dark:
            lines += ["", "@media (prefers-color-scheme: dark) {", "  :root {"]
            lines += dark
            lines += ["  }", "}"]
        lines.append("")
        return "\n".join(lines)

    def _build_catalogue(self, tokens: Sequence[ResolvedToken]) -> str:
        template = create_environment().get_template("catalogue.html.j2")
        return template.render(
            title=self.title,
            groups=group_by_category(tokens),
            stats=token_stats(tokens),
            SemanticType=SemanticType,
        )
