"""
Token set parsing.

Turns raw Token Studio JSON into a ``TokenBranch`` tree. The leaf/branch
decision is made here and nowhere else: an object carrying both ``value``
and ``type`` is a leaf, any other object is a branch, anything that is not
an object is dropped.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import Any

from .ir import TokenBranch, TokenLeaf


def is_leaf_data(data: Any) -> bool:
    """Check whether raw JSON data is a token leaf."""
    return isinstance(data, Mapping) and "value" in data and "type" in data


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        # 16.0 -> "16", matching how JS String() prints whole floats
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    if value is None:
        return ""
    # Composite values (typography, shadows) keep their JSON form
    return json.dumps(value, separators=(",", ":"))


def parse_leaf(data: Mapping[str, Any]) -> TokenLeaf:
    description = data.get("description")
    return TokenLeaf(
        value=_stringify(data["value"]),
        type=str(data["type"]),
        description=str(description) if description else None,
    )


def parse_document(data: Mapping[str, Any]) -> TokenBranch:
    """Parse a raw token set document into a tree.

    Args:
        data: Decoded JSON object.

    Returns:
        Root branch with children in document order.
    """
    children: dict[str, TokenLeaf | TokenBranch] = {}
    for key, value in data.items():
        if is_leaf_data(value):
            children[str(key)] = parse_leaf(value)
        elif isinstance(value, Mapping):
            children[str(key)] = parse_document(value)
    return TokenBranch(children=children)


def as_tree(doc: TokenBranch | Mapping[str, Any]) -> TokenBranch:
    """Accept either an already parsed tree or raw JSON."""
    if isinstance(doc, TokenBranch):
        return doc
    return parse_document(doc)


def iter_leaves(branch: TokenBranch, prefix: str = "") -> Iterator[tuple[str, TokenLeaf]]:
    """Yield ``(dotted_path, leaf)`` pairs depth-first in document order."""
    for key, node in branch.children.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(node, TokenLeaf):
            yield path, node
        else:
            yield from iter_leaves(node, path)
