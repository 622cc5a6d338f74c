"""
Token set loading and resolution.

One load runs in two strictly ordered phases:

1. Fetch every document concurrently and parse it.
2. Build the complete reference map from all documents (Core first, then
   Sys), and only then flatten each Sys document against it.

Resolving before the map is complete would report references to
not-yet-indexed paths as unresolved.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager, AsyncExitStack
from dataclasses import dataclass, field

from .errors import DocumentError, ErrorContext
from .flatten import flatten
from .ir import (
    DEFAULT_POLICY,
    ColorMode,
    DocumentRole,
    DocumentSpec,
    ResolutionPolicy,
    ResolvedToken,
    TokenBranch,
)
from .references import ReferenceMap, build_reference_map
from .sources import ContentSource
from .tree import parse_document

logger = logging.getLogger(__name__)

# =============================================================================
# Default document set
# =============================================================================

CORE_DOCUMENTS: list[DocumentSpec] = [
    DocumentSpec(path="Core/Typography", role=DocumentRole.CORE),
    DocumentSpec(path="Core/Spacings", role=DocumentRole.CORE, prefix="spacing"),
    DocumentSpec(path="Core/Colors", role=DocumentRole.CORE, required=False),
    DocumentSpec(path="Core/Icons", role=DocumentRole.CORE, required=False),
]

SYS_DOCUMENTS: list[DocumentSpec] = [
    DocumentSpec(path="Sys/Color/Light", category="color", mode=ColorMode.LIGHT),
    DocumentSpec(path="Sys/Color/Dark", category="color", mode=ColorMode.DARK, required=False),
    DocumentSpec(path="Sys/Typography", category="typography"),
    DocumentSpec(path="Sys/Spacing", category="spacing"),
    DocumentSpec(path="Sys/Border Radius", category="borderRadius"),
]

DEFAULT_DOCUMENTS: list[DocumentSpec] = CORE_DOCUMENTS + SYS_DOCUMENTS


@dataclass
class LoadedDocument:
    spec: DocumentSpec
    tree: TokenBranch


@dataclass
class LoadedDocuments:
    """Documents that were fetched successfully, in declaration order."""

    documents: list[LoadedDocument] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def core(self) -> list[LoadedDocument]:
        return [d for d in self.documents if d.spec.role is DocumentRole.CORE]

    @property
    def sys(self) -> list[LoadedDocument]:
        return [d for d in self.documents if d.spec.role is DocumentRole.SYS]


def index_order(specs: Sequence[DocumentSpec]) -> list[DocumentSpec]:
    """Core documents first, then Sys, each group keeping declaration order."""
    core = [s for s in specs if s.role is DocumentRole.CORE]
    sys_ = [s for s in specs if s.role is DocumentRole.SYS]
    return core + sys_


async def load_documents(
    source: ContentSource,
    specs: Sequence[DocumentSpec] = DEFAULT_DOCUMENTS,
) -> LoadedDocuments:
    """Fetch and parse all documents concurrently.

    Optional documents that fail are skipped with an INFO line. Each
    required document that fails is logged once at ERROR; if any did,
    a ``DocumentError`` is raised after all fetches have settled.

    Args:
        source: Where to read documents from.
        specs: Documents to fetch.

    Returns:
        LoadedDocuments in Core-then-Sys order.

    Raises:
        DocumentError: If a required document is missing or malformed.
    """
    ordered = index_order(specs)
    async with AsyncExitStack() as stack:
        if isinstance(source, AbstractAsyncContextManager):
            # one session (e.g. one HTTP connection pool) per load
            await stack.enter_async_context(source)
        results = await asyncio.gather(
            *(source.fetch(spec.path) for spec in ordered),
            return_exceptions=True,
        )

    loaded = LoadedDocuments()
    failed: list[str] = []
    for spec, result in zip(ordered, results, strict=True):
        if isinstance(result, BaseException):
            # cancellation and interrupts propagate
            if not isinstance(result, Exception):
                raise result
            if spec.required:
                logger.error("Failed to load token set %s: %s", spec.path, result)
                failed.append(spec.path)
            else:
                logger.info("Optional token set %s not loaded: %s", spec.path, result)
                loaded.skipped.append(spec.path)
            continue
        loaded.documents.append(LoadedDocument(spec=spec, tree=parse_document(result)))

    if failed:
        raise DocumentError(
            f"{len(failed)} required token set(s) unavailable",
            ErrorContext(document=", ".join(failed)),
        )
    return loaded


def build_document_references(loaded: LoadedDocuments) -> ReferenceMap:
    """Index every loaded document (Core, then Sys) into one reference map."""
    refs = ReferenceMap()
    for document in loaded.core + loaded.sys:
        build_reference_map(document.tree, document.spec.prefix, refs)
    logger.debug("Built reference map with %d entries", len(refs))
    return refs


def resolve_documents(
    loaded: LoadedDocuments,
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> list[ResolvedToken]:
    """Flatten every Sys document against the complete reference map."""
    refs = build_document_references(loaded)
    tokens: list[ResolvedToken] = []
    for document in loaded.sys:
        spec = document.spec
        category = spec.category or spec.path.split("/")[-1].lower()
        set_tokens = flatten(document.tree, category, refs, spec.mode, policy)
        logger.debug("Flattened %d tokens from %s", len(set_tokens), spec.path)
        tokens.extend(set_tokens)
    logger.info("Resolved %d tokens from %d token sets", len(tokens), len(loaded.sys))
    return tokens


async def load_tokens(
    source: ContentSource,
    specs: Sequence[DocumentSpec] = DEFAULT_DOCUMENTS,
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> list[ResolvedToken]:
    """Fetch, index and flatten in one go."""
    loaded = await load_documents(source, specs)
    return resolve_documents(loaded, policy)
