"""
swatch core: token set parsing, reference resolution and the token store.
"""

from .classifier import classify
from .errors import (
    DocumentError,
    ExportError,
    MalformedDocumentError,
    ManifestError,
    MissingDocumentError,
    SwatchError,
)
from .flatten import count_leaves, flatten
from .loader import DEFAULT_DOCUMENTS, load_documents, load_tokens, resolve_documents
from .references import ReferenceMap, build_reference_map, is_reference, resolve
from .store import StoreState, TokenStore

__all__ = [
    "DEFAULT_DOCUMENTS",
    "DocumentError",
    "ExportError",
    "MalformedDocumentError",
    "ManifestError",
    "MissingDocumentError",
    "ReferenceMap",
    "StoreState",
    "SwatchError",
    "TokenStore",
    "build_reference_map",
    "classify",
    "count_leaves",
    "flatten",
    "is_reference",
    "load_documents",
    "load_tokens",
    "resolve",
    "resolve_documents",
]
