"""
Exporter base classes.

Exporters turn a resolved token list into platform source files. They are
pure: ``export()`` only builds strings; writing happens in
``write_exports``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, TypeVar

from ..core.errors import ExportError
from ..core.ir import ColorMode, ResolvedToken, SemanticType
from .formatting import HexColor, normalize_weight, parse_hex_color, parse_magnitude

V = TypeVar("V")


@dataclass
class PlatformExport:
    """One generated file."""

    platform: str
    format: str
    filename: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {
            "platform": self.platform,
            "format": self.format,
            "filename": self.filename,
            "content": self.content,
        }


@dataclass
class ExportResult:
    """
    Result from an exporter run.

    Attributes:
        platform: Exporter name
        exports: Generated files, not yet written
        warnings: Tokens skipped because their value does not fit the target
        files_created: Filled in by ``write_exports``
    """

    platform: str
    exports: list[PlatformExport] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    files_created: list[Path] = field(default_factory=list)

    def add(self, filename: str, format: str, content: str) -> None:
        self.exports.append(PlatformExport(self.platform, format, filename, content))

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    @property
    def filenames(self) -> list[str]:
        return [e.filename for e in self.exports]

    def get(self, filename: str) -> PlatformExport | None:
        for export in self.exports:
            if export.filename == filename:
                return export
        return None


@dataclass
class ExporterCapabilities:
    name: str
    description: str
    output_formats: list[str]


@dataclass
class ColorPair:
    """Light and (optional) dark variant of one color token name."""

    name: str
    light: HexColor
    dark: HexColor | None
    light_token: ResolvedToken
    dark_token: ResolvedToken | None = None

    @property
    def dark_or_light(self) -> HexColor:
        return self.dark if self.dark is not None else self.light


class DeclaredNames:
    """Identifiers already declared in one generated file.

    Distinct token names can map to one identifier (``text.primary`` and
    ``text-primary`` are both ``textPrimary``). The first token keeps it;
    later ones are skipped with a warning.
    """

    def __init__(self, filename: str, result: ExportResult):
        self.filename = filename
        self.result = result
        self._owners: dict[str, str] = {}

    def claim(self, token_name: str, *idents: str) -> bool:
        """Reserve every identifier in ``idents`` for ``token_name``, or none of them."""
        for ident in idents:
            owner = self._owners.get(ident)
            if owner is not None:
                self.result.add_warning(
                    f"{token_name}: identifier {ident!r} in {self.filename} "
                    f"already used by {owner}, skipped"
                )
                return False
        for ident in idents:
            self._owners[ident] = token_name
        return True

    def keep(
        self,
        entries: Iterable[tuple[ResolvedToken, V]],
        to_ident: Callable[[str], str],
    ) -> list[tuple[str, ResolvedToken, V]]:
        """Entries whose identifier is still free, as ``(ident, token, value)``."""
        kept = []
        for token, value in entries:
            ident = to_ident(token.name)
            if self.claim(token.name, ident):
                kept.append((ident, token, value))
        return kept


class Exporter(ABC):
    """Base class for platform exporters."""

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    output_formats: ClassVar[list[str]] = []

    def __init__(self, **options: Any):
        self.options = options

    @abstractmethod
    def export(self, tokens: Sequence[ResolvedToken]) -> ExportResult:
        """Build every file for this platform."""

    def get_capabilities(self) -> ExporterCapabilities:
        return ExporterCapabilities(
            name=self.name,
            description=self.description,
            output_formats=list(self.output_formats),
        )

    # -------------------------------------------------------------------------
    # Token selection helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def of_type(tokens: Iterable[ResolvedToken], *types: SemanticType) -> list[ResolvedToken]:
        return [t for t in tokens if t.type in types]

    def color_pairs(self, tokens: Sequence[ResolvedToken], result: ExportResult) -> list[ColorPair]:
        """Pair light and dark color tokens by name, light order first.

        Tokens without a mode count as light. Dark tokens with no light
        counterpart are dropped; values that are not hex colors are
        skipped with a warning.
        """
        pairs: dict[str, ColorPair] = {}
        colors = self.of_type(tokens, SemanticType.COLOR)
        for token in colors:
            if token.mode is ColorMode.DARK or token.name in pairs:
                continue
            parsed = parse_hex_color(token.value)
            if parsed is None:
                result.add_warning(f"{token.name}: not a hex color ({token.value!r}), skipped")
                continue
            pairs[token.name] = ColorPair(token.name, parsed, None, token)
        for token in colors:
            if token.mode is not ColorMode.DARK:
                continue
            pair = pairs.get(token.name)
            if pair is None:
                continue
            parsed = parse_hex_color(token.value)
            if parsed is None:
                result.add_warning(f"{token.name} (Dark): not a hex color ({token.value!r}), skipped")
                continue
            pair.dark = parsed
            pair.dark_token = token
        return list(pairs.values())

    def magnitudes(
        self,
        tokens: Iterable[ResolvedToken],
        result: ExportResult,
    ) -> list[tuple[ResolvedToken, float]]:
        """Numeric tokens with their magnitude; others are skipped with a warning."""
        values = []
        for token in tokens:
            number = parse_magnitude(token.value)
            if number is None:
                result.add_warning(
                    f"{token.name}: not a non-negative number ({token.value!r}), skipped"
                )
                continue
            values.append((token, number))
        return values

    def font_weights(
        self,
        tokens: Iterable[ResolvedToken],
        result: ExportResult,
        names: dict[str, str],
    ) -> list[tuple[ResolvedToken, str]]:
        """Font weight tokens mapped through ``names`` (numeric weight -> platform constant)."""
        weights = []
        for token in self.of_type(tokens, SemanticType.FONT_WEIGHT):
            weight = normalize_weight(token.value)
            if weight is None:
                result.add_warning(f"{token.name}: unknown font weight ({token.value!r}), skipped")
                continue
            weights.append((token, names[weight]))
        return weights


def write_exports(result: ExportResult, output_dir: Path) -> list[Path]:
    """Write every file of ``result`` under ``output_dir``.

    Raises:
        ExportError: If a file cannot be written.
    """
    written = []
    for export in result.exports:
        path = output_dir / export.filename
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(export.content, encoding="utf-8")
        except OSError as e:
            raise ExportError(f"Cannot write {path}: {e}") from e
        written.append(path)
    result.files_created.extend(written)
    return written
