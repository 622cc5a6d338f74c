"""
swatch - design token pipeline.

Loads Token Studio token sets, resolves ``{a.b.c}`` references, classifies
tokens by semantic type and exports them to iOS, Android and the web.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core import ir
from .core.errors import DocumentError, ExportError, ManifestError, SwatchError
from .core.ir import ColorMode, ResolvedToken, SemanticType
from .core.store import TokenStore

try:
    __version__ = _metadata_version("swatch")
except PackageNotFoundError:
    # Source checkout without an install
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ir",
    "ColorMode",
    "DocumentError",
    "ExportError",
    "ManifestError",
    "ResolvedToken",
    "SemanticType",
    "SwatchError",
    "TokenStore",
]
