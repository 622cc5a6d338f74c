"""
Project manifest (swatch.toml).

Example::

    [source]
    kind = "filesystem"     # or "http"
    root = "tokens"
    base_url = "http://localhost:8080/tokens"
    timeout = 10.0

    [resolution]
    fallback_segments = 2
    max_depth = 32
    dimension_type = "spacing"

    [export]
    output_dir = "build"
    platforms = ["ios", "android", "web"]
    android_package = "com.example.designsystem"
    title = "Design Tokens"

    [[documents]]
    path = "Core/Colors"
    role = "core"
    required = false

Every section is optional; a missing file yields the defaults.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ManifestError
from .ir import DocumentSpec, ResolutionPolicy
from .loader import DEFAULT_DOCUMENTS
from .sources import ContentSource, FileSystemSource, HttpSource
from .store import TokenStore

logger = logging.getLogger(__name__)

MANIFEST_FILE = "swatch.toml"

SOURCE_KINDS = ("filesystem", "http")


@dataclass
class SourceConfig:
    """Where token sets are read from."""

    kind: str = "filesystem"
    root: str = "tokens"
    base_url: str | None = None
    timeout: float = 10.0


@dataclass
class ExportConfig:
    output_dir: str = "build"
    platforms: list[str] = field(default_factory=lambda: ["ios", "android", "web"])
    android_package: str = "com.example.designsystem"
    title: str = "Design Tokens"


@dataclass
class SwatchManifest:
    """
    Project manifest loaded from swatch.toml.

    ``project_root`` anchors relative paths (token root, output dir).
    """

    project_root: Path = field(default_factory=Path.cwd)
    source: SourceConfig = field(default_factory=SourceConfig)
    resolution: ResolutionPolicy = field(default_factory=ResolutionPolicy)
    documents: list[DocumentSpec] = field(default_factory=lambda: list(DEFAULT_DOCUMENTS))
    export: ExportConfig = field(default_factory=ExportConfig)

    @property
    def tokens_root(self) -> Path:
        return (self.project_root / self.source.root).resolve()

    @property
    def output_dir(self) -> Path:
        return (self.project_root / self.export.output_dir).resolve()

    def create_source(self) -> ContentSource:
        if self.source.kind == "http":
            if not self.source.base_url:
                raise ManifestError("[source] kind = 'http' needs a base_url")
            return HttpSource(self.source.base_url, timeout=self.source.timeout)
        return FileSystemSource(self.tokens_root)

    def create_store(self) -> TokenStore:
        return TokenStore.from_source(self.create_source(), self.documents, self.resolution)


def get_manifest_path(project_root: Path) -> Path:
    return project_root / MANIFEST_FILE


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ManifestError(f"[{key}] must be a table, got {type(value).__name__}")
    return value


def _string(section: str, data: dict[str, Any], key: str, default: str | None) -> str | None:
    value = data.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ManifestError(f"[{section}] {key} must be a string, got {value!r}")
    return value


def _parse_source(data: dict[str, Any]) -> SourceConfig:
    kind = data.get("kind", "filesystem")
    if kind not in SOURCE_KINDS:
        raise ManifestError(f"[source] kind must be one of {', '.join(SOURCE_KINDS)}, got {kind!r}")
    timeout = data.get("timeout", 10.0)
    # bool is an int subclass
    if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
        raise ManifestError(f"[source] timeout must be a positive number, got {timeout!r}")
    return SourceConfig(
        kind=kind,
        root=_string("source", data, "root", "tokens"),
        base_url=_string("source", data, "base_url", None),
        timeout=float(timeout),
    )


def _parse_export(data: dict[str, Any]) -> ExportConfig:
    defaults = ExportConfig()
    platforms = data.get("platforms", defaults.platforms)
    if not isinstance(platforms, list) or not all(isinstance(p, str) for p in platforms):
        raise ManifestError(f"[export] platforms must be a list of names, got {platforms!r}")
    return ExportConfig(
        output_dir=_string("export", data, "output_dir", defaults.output_dir),
        platforms=list(platforms),
        android_package=_string("export", data, "android_package", defaults.android_package),
        title=_string("export", data, "title", defaults.title),
    )


def parse_manifest(data: dict[str, Any], project_root: Path) -> SwatchManifest:
    """Build a manifest from decoded TOML.

    Raises:
        ManifestError: If a section or value has the wrong shape.
    """
    raw_documents = data.get("documents")
    if raw_documents is not None and not (
        isinstance(raw_documents, list) and all(isinstance(d, dict) for d in raw_documents)
    ):
        raise ManifestError("[[documents]] must be an array of tables")
    try:
        resolution = ResolutionPolicy(**_table(data, "resolution"))
        documents = (
            [DocumentSpec(**doc) for doc in raw_documents]
            if raw_documents is not None
            else list(DEFAULT_DOCUMENTS)
        )
    except (ValidationError, TypeError) as e:
        raise ManifestError(f"Invalid {MANIFEST_FILE}: {e}") from e

    return SwatchManifest(
        project_root=project_root,
        source=_parse_source(_table(data, "source")),
        resolution=resolution,
        documents=documents,
        export=_parse_export(_table(data, "export")),
    )


def load_manifest(project_root: Path) -> SwatchManifest:
    """Load swatch.toml from ``project_root``, or defaults when absent.

    Raises:
        ManifestError: If the file exists but is not valid.
    """
    path = get_manifest_path(project_root)
    if not path.exists():
        logger.debug("No %s in %s, using defaults", MANIFEST_FILE, project_root)
        return SwatchManifest(project_root=project_root)
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {path}: {e}") from e
    return parse_manifest(data, project_root)
