"""
Platform exporters.

Each exporter turns the resolved token list into source files for one
platform. ``export_platforms`` runs a set of them, writes the files under
``<output_dir>/<platform>/`` and records a ``stats.json`` summary.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..core.errors import ExportError
from ..core.ir import ResolvedToken
from ..core.queries import token_stats
from .android import AndroidExporter
from .base import (
    ColorPair,
    Exporter,
    ExporterCapabilities,
    ExportResult,
    PlatformExport,
    write_exports,
)
from .ios import IOSExporter
from .web import WebExporter

logger = logging.getLogger(__name__)

STATS_FILE = "stats.json"


class ExporterRegistry:
    """Exporter classes by platform name."""

    def __init__(self) -> None:
        self._exporters: dict[str, type[Exporter]] = {}

    def register(self, exporter_class: type[Exporter]) -> None:
        """
        Register an exporter class under its ``name``.

        Raises:
            ExportError: If the name is taken or the class is not an Exporter
        """
        if not issubclass(exporter_class, Exporter):
            raise ExportError(f"Exporter class {exporter_class.__name__} must extend Exporter")
        if exporter_class.name in self._exporters:
            raise ExportError(f"Exporter '{exporter_class.name}' is already registered")
        self._exporters[exporter_class.name] = exporter_class

    def get(self, name: str, **options: Any) -> Exporter:
        """
        Get an exporter instance by name.

        Raises:
            ExportError: If no exporter has that name
        """
        if name not in self._exporters:
            available = ", ".join(self._exporters)
            raise ExportError(f"Unknown platform '{name}'. Available platforms: {available}")
        return self._exporters[name](**options)

    def list_exporters(self) -> list[str]:
        return list(self._exporters)


_registry = ExporterRegistry()
for _exporter in (IOSExporter, AndroidExporter, WebExporter):
    _registry.register(_exporter)


def get_registry() -> ExporterRegistry:
    return _registry


def get_exporter(name: str, **options: Any) -> Exporter:
    return _registry.get(name, **options)


def list_exporters() -> list[str]:
    return _registry.list_exporters()


def build_stats(
    tokens: Sequence[ResolvedToken],
    results: dict[str, ExportResult],
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Content of ``stats.json``."""
    counts = token_stats(tokens)
    stamp = (now or datetime.now(UTC)).isoformat()
    return {
        "colors": counts["colors"],
        "typography": counts["typography"],
        "spacing": counts["spacing"],
        "borderRadius": counts["borderRadius"],
        "totalTokens": counts["total"],
        "lastUpdated": stamp,
        "platforms": {
            name: {"files": result.filenames, "warnings": len(result.warnings)}
            for name, result in results.items()
        },
    }


def export_platforms(
    tokens: Sequence[ResolvedToken],
    platforms: Iterable[str],
    output_dir: Path,
    **options: Any,
) -> dict[str, ExportResult]:
    """
    Export ``tokens`` for each platform and write the files.

    Args:
        tokens: Resolved token list
        platforms: Platform names (``ios``, ``android``, ``web``)
        output_dir: Root directory; each platform gets a subdirectory
        **options: Passed to every exporter (``android_package``, ``title``)

    Returns:
        Results by platform name, with ``files_created`` filled in

    Raises:
        ExportError: Unknown platform or unwritable output directory
    """
    # Resolve every name before writing anything
    exporters = [get_exporter(name, **options) for name in dict.fromkeys(platforms)]

    results: dict[str, ExportResult] = {}
    for exporter in exporters:
        result = exporter.export(tokens)
        write_exports(result, output_dir / exporter.name)
        for warning in result.warnings:
            logger.warning("%s: %s", exporter.name, warning)
        logger.info("Exported %d files for %s", len(result.exports), exporter.name)
        results[exporter.name] = result

    stats_path = output_dir / STATS_FILE
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        stats_path.write_text(json.dumps(build_stats(tokens, results), indent=2) + "\n")
    except OSError as e:
        raise ExportError(f"Cannot write {stats_path}: {e}") from e
    return results


__all__ = [
    "AndroidExporter",
    "ColorPair",
    "ExportResult",
    "Exporter",
    "ExporterCapabilities",
    "ExporterRegistry",
    "IOSExporter",
    "PlatformExport",
    "STATS_FILE",
    "WebExporter",
    "build_stats",
    "export_platforms",
    "get_exporter",
    "get_registry",
    "list_exporters",
    "write_exports",
]
