"""
Token flattening.

Walks a token set exactly like reference indexing does and turns every
leaf into a ``ResolvedToken``. Output order is document order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .classifier import classify
from .ir import DEFAULT_POLICY, ColorMode, ResolutionPolicy, ResolvedToken, TokenBranch
from .references import resolve
from .tree import as_tree, iter_leaves


def flatten(
    doc: TokenBranch | Mapping[str, Any],
    category: str,
    refs: Mapping[str, str],
    mode: ColorMode | str | None = None,
    policy: ResolutionPolicy = DEFAULT_POLICY,
) -> list[ResolvedToken]:
    """Flatten a token set into resolved tokens.

    Args:
        doc: Parsed tree or raw JSON document.
        category: Category stamped on every emitted token.
        refs: Fully built reference map (read-only here).
        mode: Light/Dark for color sets, None otherwise.
        policy: Resolution and classification policy.

    Returns:
        One ResolvedToken per leaf, in document order.
    """
    token_mode = ColorMode(mode) if mode is not None else None
    tokens: list[ResolvedToken] = []
    for path, leaf in iter_leaves(as_tree(doc)):
        tokens.append(
            ResolvedToken(
                name=path,
                value=resolve(leaf.value, refs, policy),
                type=classify(leaf.type, path, policy),
                category=category,
                description=leaf.description,
                mode=token_mode,
            )
        )
    return tokens


def count_leaves(doc: TokenBranch | Mapping[str, Any]) -> int:
    """Number of token leaves in a document, at any depth."""
    return sum(1 for _ in iter_leaves(as_tree(doc)))
