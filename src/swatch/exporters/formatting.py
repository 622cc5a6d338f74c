"""
Value and identifier formatting shared by the platform exporters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_NAME_SPLIT = re.compile(r"[.\s_/-]+")
_NON_ALNUM = re.compile(r"[^0-9A-Za-z]")
_HEX = re.compile(r"^#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")
_MAGNITUDE = re.compile(r"^\s*(-?(?:\d+(?:\.\d*)?|\.\d+))\s*(px|dp|sp|pt)?\s*$", re.IGNORECASE)


# =============================================================================
# Identifiers
# =============================================================================


def _name_parts(name: str) -> list[str]:
    parts = (_NON_ALNUM.sub("", p) for p in _NAME_SPLIT.split(name))
    return [p for p in parts if p]


def to_camel_name(name: str) -> str:
    """``sys.surface-primary`` -> ``sysSurfacePrimary`` (Swift/Kotlin identifier)."""
    parts = _name_parts(name)
    if not parts:
        return "token"
    ident = parts[0].lower() + "".join(p[:1].upper() + p[1:].lower() for p in parts[1:])
    if ident[0].isdigit():
        ident = "token" + ident
    return ident


def to_resource_name(name: str) -> str:
    """``Surface.Primary-Alt`` -> ``surface_primary_alt`` (Android resource name)."""
    parts = [p.lower() for p in _name_parts(name)]
    ident = "_".join(parts) or "token"
    if ident[0].isdigit():
        ident = "token_" + ident
    return ident


def to_css_name(name: str) -> str:
    """``surface.primary`` -> ``--surface-primary``."""
    parts = [p.lower() for p in _name_parts(name)]
    return "--" + ("-".join(parts) or "token")


SWIFT_KEYWORDS = frozenset(
    {
        "any", "as", "associatedtype", "break", "case", "catch", "class", "continue",
        "default", "defer", "deinit", "do", "else", "enum", "extension", "fallthrough",
        "false", "fileprivate", "for", "func", "guard", "if", "import", "in", "init",
        "inout", "internal", "is", "let", "nil", "open", "operator", "private",
        "precedencegroup", "protocol", "public", "repeat", "rethrows", "return", "self",
        "static", "struct", "subscript", "super", "switch", "throw", "throws", "true",
        "try", "typealias", "var", "where", "while",
    }
)  # fmt: skip

KOTLIN_KEYWORDS = frozenset(
    {
        "as", "break", "class", "continue", "do", "else", "false", "for", "fun", "if",
        "in", "interface", "is", "null", "object", "package", "return", "super", "this",
        "throw", "true", "try", "typealias", "typeof", "val", "var", "when", "while",
    }
)  # fmt: skip


def swift_identifier(ident: str) -> str:
    """Backtick-quote Swift reserved words: ``default`` -> ```default```."""
    return f"`{ident}`" if ident in SWIFT_KEYWORDS else ident


def kotlin_identifier(ident: str) -> str:
    return f"`{ident}`" if ident in KOTLIN_KEYWORDS else ident


# =============================================================================
# Colors
# =============================================================================


@dataclass(frozen=True)
class HexColor:
    red: int
    green: int
    blue: int
    alpha: int = 255

    @property
    def hex(self) -> str:
        """Uppercase ``#RRGGBB``."""
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"

    @property
    def opaque(self) -> bool:
        return self.alpha == 255

    @property
    def android_hex(self) -> str:
        """``#RRGGBB`` when opaque, ``#AARRGGBB`` otherwise."""
        if self.opaque:
            return self.hex
        return f"#{self.alpha:02X}{self.red:02X}{self.green:02X}{self.blue:02X}"

    @property
    def argb_literal(self) -> str:
        """Compose literal, e.g. ``0xFF112233``."""
        return f"0x{self.alpha:02X}{self.red:02X}{self.green:02X}{self.blue:02X}"

    def unit_components(self) -> tuple[str, str, str, str]:
        """0-1 RGBA components with three decimals, for UIKit."""
        return (
            f"{self.red / 255:.3f}",
            f"{self.green / 255:.3f}",
            f"{self.blue / 255:.3f}",
            f"{self.alpha / 255:.1f}" if self.alpha in (0, 255) else f"{self.alpha / 255:.3f}",
        )


def parse_hex_color(value: str) -> HexColor | None:
    """Parse ``#RGB``, ``#RRGGBB`` or ``#RRGGBBAA``; None for anything else."""
    match = _HEX.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) if len(digits) == 8 else 255
    return HexColor(red, green, blue, alpha)


# =============================================================================
# Magnitudes
# =============================================================================


def parse_magnitude(value: str) -> float | None:
    """Numeric magnitude of ``"16"``, ``"16px"``, ``"1.5"``; None if not a non-negative number."""
    match = _MAGNITUDE.match(value)
    if not match:
        return None
    number = float(match.group(1))
    if number < 0:
        return None
    return number


def format_number(number: float) -> str:
    """16.0 -> "16", 1.5 -> "1.5"."""
    if float(number).is_integer():
        return str(int(number))
    return f"{number:.4f}".rstrip("0").rstrip(".")


# =============================================================================
# Comments
# =============================================================================


def xml_comment_text(text: str) -> str:
    """Text safe inside ``<!-- -->``."""
    return text.replace("--", "- -").replace("\n", " ")


def line_comment_text(text: str) -> str:
    return " ".join(text.split())


# =============================================================================
# Font weights
# =============================================================================

NUMERIC_WEIGHTS = frozenset({"100", "200", "300", "400", "500", "600", "700", "800", "900"})

# Token Studio also writes weights by name
NAMED_WEIGHTS: dict[str, str] = {
    "thin": "100",
    "extralight": "200",
    "ultralight": "200",
    "light": "300",
    "regular": "400",
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
    "extrabold": "800",
    "heavy": "800",
    "black": "900",
}


def normalize_weight(value: str) -> str | None:
    """Map "600", "SemiBold", "semi-bold" to a numeric weight string."""
    key = value.strip().lower().replace("-", "").replace(" ", "")
    if key in NUMERIC_WEIGHTS:
        return key
    return NAMED_WEIGHTS.get(key)
