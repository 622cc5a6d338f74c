"""
Reference indexing and resolution.

A reference is a token value of the form ``{dotted.path}``. The reference
map stores one hop per path (the raw value, which may itself be a
reference); ``resolve`` follows the chain to a literal.

Later documents overwrite earlier ones for the same path (Sys over Core).
Unrelated tokens that happen to share a path collide silently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .ir import DEFAULT_POLICY, ResolutionPolicy, TokenBranch
from .tree import as_tree, iter_leaves

logger = logging.getLogger(__name__)


class ReferenceMap(dict[str, str]):
    """Dotted path -> raw token value.

    Tracks paths that were redefined by a later document so the
    validation report can list them. Resolution ignores that record.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.overwritten: list[str] = []

    def record(self, path: str, value: str) -> None:
        if path in self and self[path] != value and path not in self.overwritten:
            self.overwritten.append(path)
        self[path] = value

    @classmethod
    def from_documents(
        cls, documents: Iterable[tuple[TokenBranch | Mapping[str, Any], str]]
    ) -> ReferenceMap:
        """Build a map from ``(document, prefix)`` pairs, in order."""
        refs = cls()
        for doc, prefix in documents:
            build_reference_map(doc, prefix, refs)
        return refs


def build_reference_map(
    doc: TokenBranch | Mapping[str, Any],
    prefix: str = "",
    refs: ReferenceMap | None = None,
) -> ReferenceMap:
    """Index every leaf of ``doc`` under ``prefix`` into ``refs``.

    Args:
        doc: Parsed tree or raw JSON document.
        prefix: Dotted prefix prepended to every path ("" for none).
        refs: Map to merge into; a new one is created when omitted.

    Returns:
        The (mutated) reference map.
    """
    if refs is None:
        refs = ReferenceMap()
    for path, leaf in iter_leaves(as_tree(doc), prefix):
        refs.record(path, leaf.value)
    return refs


def is_reference(value: Any) -> bool:
    """Check whether a value is reference-shaped (``{...}``)."""
    return isinstance(value, str) and len(value) >= 2 and value[0] == "{" and value[-1] == "}"


class ResolutionStatus(StrEnum):
    LITERAL = "literal"
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    CYCLE = "cycle"


@dataclass
class Resolution:
    """Outcome of tracing a value through the reference map."""

    value: str
    status: ResolutionStatus
    chain: list[str] = field(default_factory=list)
    used_fallback: bool = False
    missing: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in (ResolutionStatus.LITERAL, ResolutionStatus.RESOLVED)


def _lookup(ref: str, refs: Mapping[str, str], policy: ResolutionPolicy) -> tuple[str | None, bool]:
    found = refs.get(ref)
    if found is not None:
        return found, False
    n = policy.fallback_segments
    if n > 0:
        parts = ref.split(".")
        if len(parts) > n:
            found = refs.get(".".join(parts[-n:]))
            if found is not None:
                return found, True
    return None, False


def trace_reference(
    value: str,
    refs: Mapping[str, str],
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> Resolution:
    """Follow ``value`` through ``refs`` without emitting diagnostics."""
    if not is_reference(value):
        return Resolution(value=value, status=ResolutionStatus.LITERAL)

    current = value
    chain: list[str] = []
    used_fallback = False
    while is_reference(current):
        ref = current[1:-1]
        if len(chain) >= policy.max_depth or ref in chain:
            return Resolution(
                value=value,
                status=ResolutionStatus.CYCLE,
                chain=chain,
                used_fallback=used_fallback,
                missing=ref,
            )
        chain.append(ref)
        found, via_fallback = _lookup(ref, refs, policy)
        if found is None:
            return Resolution(
                value=current,
                status=ResolutionStatus.UNRESOLVED,
                chain=chain,
                used_fallback=used_fallback,
                missing=ref,
            )
        used_fallback = used_fallback or via_fallback
        current = found

    return Resolution(
        value=current,
        status=ResolutionStatus.RESOLVED,
        chain=chain,
        used_fallback=used_fallback,
    )


def resolve(
    value: str,
    refs: Mapping[str, str],
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> str:
    """Resolve a possibly-referencing value to a literal.

    Literals come back unchanged. References follow the chain, retrying a
    missing hop with its trailing path segments. A reference that still
    cannot be found is returned as-is and logged once at WARNING.

    Args:
        value: Raw token value.
        refs: Reference map.
        policy: Fallback depth and hop bound.

    Returns:
        Resolved literal, or the unresolved reference string.
    """
    result = trace_reference(value, refs, policy)
    if result.status is ResolutionStatus.UNRESOLVED:
        logger.warning("Unresolved reference: %s", result.missing)
    elif result.status is ResolutionStatus.CYCLE:
        logger.warning(
            "Reference chain for %s exceeds %d hops or loops; left unresolved",
            value[1:-1],
            policy.max_depth,
        )
    return result.value
