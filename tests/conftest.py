"""Shared pytest fixtures for swatch tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from swatch.core.errors import make_document_error

# A small but complete token set tree in the default document layout.
TOKEN_SETS: dict[str, dict[str, Any]] = {
    "Core/Typography": {
        "font": {
            "size": {
                "body": {"value": "16", "type": "fontSizes"},
                "h1": {"value": "32", "type": "fontSizes"},
            },
            "weight": {"bold": {"value": "700", "type": "fontWeights"}},
            "family": {"sans": {"value": "Inter", "type": "fontFamilies"}},
        }
    },
    "Core/Spacings": {
        "sm": {"value": "8", "type": "spacing"},
        "md": {"value": "16", "type": "spacing"},
    },
    "Core/Colors": {
        "color": {
            "gray": {
                "100": {"value": "#EEEEEE", "type": "color"},
                "900": {"value": "#1A1A1A", "type": "color"},
            },
            "blue": {"500": {"value": "#3366FF", "type": "color"}},
        }
    },
    "Sys/Color/Light": {
        "surface": {"value": "{color.gray.100}", "type": "color"},
        "text": {
            "primary": {
                "value": "{color.gray.900}",
                "type": "color",
                "description": "Body text",
            }
        },
        "accent": {"value": "{color.blue.500}", "type": "color"},
    },
    "Sys/Color/Dark": {
        "surface": {"value": "{color.gray.900}", "type": "color"},
        "text": {"primary": {"value": "{color.gray.100}", "type": "color"}},
        "accent": {"value": "{color.blue.500}", "type": "color"},
    },
    "Sys/Typography": {
        "body": {"value": "{font.size.body}", "type": "fontSizes"},
        "heading": {"value": "{font.size.h1}", "type": "fontSizes"},
        "strong": {"value": "{font.weight.bold}", "type": "fontWeights"},
        "family": {"value": "{font.family.sans}", "type": "fontFamilies"},
    },
    "Sys/Spacing": {
        "gap": {
            "small": {"value": "{spacing.sm}", "type": "spacing"},
            "medium": {"value": "{spacing.md}", "type": "dimension"},
        }
    },
    "Sys/Border Radius": {"radius": {"card": {"value": "12", "type": "borderRadius"}}},
}


def write_token_sets(root: Path, token_sets: dict[str, dict[str, Any]]) -> Path:
    """Write ``<root>/<path>.json`` for every token set."""
    for path, document in token_sets.items():
        file_path = root / f"{path}.json"
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(json.dumps(document), encoding="utf-8")
    return root


class DictSource:
    """In-memory content source that counts fetches."""

    def __init__(self, documents: dict[str, dict[str, Any]], fail: bool = False):
        self.documents = documents
        self.fail = fail
        self.calls: list[str] = []

    async def fetch(self, path: str) -> dict[str, Any]:
        self.calls.append(path)
        if self.fail or path not in self.documents:
            raise make_document_error("not found", path)
        return copy.deepcopy(self.documents[path])


@pytest.fixture
def token_sets() -> dict[str, dict[str, Any]]:
    """Return a fresh copy of the sample token sets."""
    return copy.deepcopy(TOKEN_SETS)


@pytest.fixture
def dict_source(token_sets: dict[str, dict[str, Any]]) -> DictSource:
    return DictSource(token_sets)


@pytest.fixture
def project_dir(tmp_path: Path, token_sets: dict[str, dict[str, Any]]) -> Path:
    """Project with token sets under ``tokens/`` and no swatch.toml."""
    write_token_sets(tmp_path / "tokens", token_sets)
    return tmp_path


@pytest.fixture
def source_factory() -> type[DictSource]:
    """Return the in-memory source class for tests that need custom documents."""
    return DictSource
