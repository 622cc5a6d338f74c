"""Tests for content sources and token set loading."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx
import pytest

from swatch.core.errors import DocumentError, MalformedDocumentError, MissingDocumentError
from swatch.core.ir import ColorMode, DocumentRole, DocumentSpec, SemanticType
from swatch.core.loader import (
    DEFAULT_DOCUMENTS,
    index_order,
    load_documents,
    load_tokens,
    resolve_documents,
)
from swatch.core.sources import FileSystemSource, HttpSource


def _by_key(tokens: list[Any]) -> dict[tuple[str, ColorMode | None], Any]:
    return {(t.name, t.mode): t for t in tokens}


class TestDefaultDocuments:
    def test_core_indexed_before_sys(self) -> None:
        specs = [
            DocumentSpec(path="Sys/A"),
            DocumentSpec(path="Core/B", role=DocumentRole.CORE),
            DocumentSpec(path="Sys/C"),
            DocumentSpec(path="Core/D", role=DocumentRole.CORE),
        ]
        assert [s.path for s in index_order(specs)] == ["Core/B", "Core/D", "Sys/A", "Sys/C"]

    def test_default_set(self) -> None:
        paths = [s.path for s in DEFAULT_DOCUMENTS]
        assert paths[:4] == ["Core/Typography", "Core/Spacings", "Core/Colors", "Core/Icons"]
        assert "Sys/Color/Light" in paths and "Sys/Border Radius" in paths
        optional = {s.path for s in DEFAULT_DOCUMENTS if not s.required}
        assert optional == {"Core/Colors", "Core/Icons", "Sys/Color/Dark"}


class TestLoadTokens:
    @pytest.mark.asyncio
    async def test_resolves_sample_sets(self, dict_source: Any) -> None:
        tokens = await load_tokens(dict_source)
        assert len(tokens) == 13
        by_key = _by_key(tokens)

        assert by_key[("surface", ColorMode.LIGHT)].value == "#EEEEEE"
        assert by_key[("surface", ColorMode.DARK)].value == "#1A1A1A"
        assert by_key[("text.primary", ColorMode.LIGHT)].description == "Body text"
        assert by_key[("body", None)].value == "16"
        assert by_key[("body", None)].type is SemanticType.FONT_SIZE
        assert by_key[("strong", None)].type is SemanticType.FONT_WEIGHT
        assert by_key[("gap.small", None)].value == "8"
        assert by_key[("gap.medium", None)].type is SemanticType.SPACING
        assert by_key[("radius.card", None)].category == "borderRadius"

    @pytest.mark.asyncio
    async def test_output_follows_sys_document_order(self, dict_source: Any) -> None:
        tokens = await load_tokens(dict_source)
        categories = [t.category for t in tokens]
        assert categories == ["color"] * 6 + ["typography"] * 4 + ["spacing"] * 2 + ["borderRadius"]
        assert [t.mode for t in tokens[:6]] == [ColorMode.LIGHT] * 3 + [ColorMode.DARK] * 3

    @pytest.mark.asyncio
    async def test_reference_into_later_sys_document(self, source_factory: Any) -> None:
        source = source_factory(
            {
                "Sys/First": {"card": {"value": "{radius.card}", "type": "borderRadius"}},
                "Sys/Second": {"radius": {"card": {"value": "12", "type": "borderRadius"}}},
            }
        )
        specs = [DocumentSpec(path="Sys/First"), DocumentSpec(path="Sys/Second")]
        tokens = await load_tokens(source, specs)
        assert tokens[0].value == "12"

    @pytest.mark.asyncio
    async def test_category_defaults_to_last_path_segment(self, source_factory: Any) -> None:
        source = source_factory({"Sys/Shadows": {"card": {"value": "x", "type": "boxShadow"}}})
        (token,) = await load_tokens(source, [DocumentSpec(path="Sys/Shadows")])
        assert token.category == "shadows"


class TestLoadDocuments:
    @pytest.mark.asyncio
    async def test_fetches_concurrently(self, token_sets: dict[str, Any]) -> None:
        expected = len(DEFAULT_DOCUMENTS)
        started: list[str] = []
        all_started = asyncio.Event()

        class BarrierSource:
            async def fetch(self, path: str) -> dict[str, Any]:
                started.append(path)
                if len(started) == expected:
                    all_started.set()
                # Sequential fetching would never get past the first call
                await asyncio.wait_for(all_started.wait(), timeout=2)
                if path not in token_sets:
                    raise MissingDocumentError("missing")
                return token_sets[path]

        loaded = await load_documents(BarrierSource())
        assert len(started) == expected
        assert len(loaded.documents) == expected - 1

    @pytest.mark.asyncio
    async def test_optional_missing_is_info_only(
        self, dict_source: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="swatch"):
            loaded = await load_documents(dict_source)
        assert loaded.skipped == ["Core/Icons"]
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        info = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert any("Core/Icons" in message for message in info)

    @pytest.mark.asyncio
    async def test_missing_dark_set_yields_light_only(
        self, token_sets: dict[str, Any], source_factory: Any
    ) -> None:
        del token_sets["Sys/Color/Dark"]
        tokens = await load_tokens(source_factory(token_sets))
        assert len(tokens) == 10
        assert all(t.mode is not ColorMode.DARK for t in tokens)

    @pytest.mark.asyncio
    async def test_required_missing_logs_one_error(
        self,
        token_sets: dict[str, Any],
        source_factory: Any,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        del token_sets["Sys/Typography"]
        with caplog.at_level(logging.INFO, logger="swatch"):
            with pytest.raises(DocumentError):
                await load_documents(source_factory(token_sets))

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Sys/Typography" in errors[0].getMessage()

    @pytest.mark.asyncio
    async def test_error_names_every_failed_document(self, source_factory: Any) -> None:
        with pytest.raises(DocumentError) as exc_info:
            await load_documents(source_factory({}, fail=True))
        assert "Sys/Color/Light" in str(exc_info.value)
        assert "Core/Icons" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unexpected_required_failure_logs_one_error(
        self, token_sets: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        class BrokenSource:
            async def fetch(self, path: str) -> dict[str, Any]:
                if path == "Sys/Spacing":
                    raise RuntimeError("socket closed")
                if path not in token_sets:
                    raise MissingDocumentError("missing")
                return token_sets[path]

        with caplog.at_level(logging.INFO, logger="swatch"):
            with pytest.raises(DocumentError) as exc_info:
                await load_documents(BrokenSource())

        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Sys/Spacing" in errors[0]
        assert "socket closed" in errors[0]
        assert "Sys/Spacing" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unexpected_optional_failure_keeps_other_sets(
        self, token_sets: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        class FlakyDarkSource:
            async def fetch(self, path: str) -> dict[str, Any]:
                if path == "Sys/Color/Dark":
                    raise RuntimeError("decoder crashed")
                if path not in token_sets:
                    raise MissingDocumentError("missing")
                return token_sets[path]

        with caplog.at_level(logging.INFO, logger="swatch"):
            tokens = await load_tokens(FlakyDarkSource())

        assert len(tokens) == 10
        assert all(t.mode is not ColorMode.DARK for t in tokens)
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self) -> None:
        class CancelledSource:
            async def fetch(self, path: str) -> dict[str, Any]:
                raise asyncio.CancelledError

        with pytest.raises(asyncio.CancelledError):
            await load_documents(CancelledSource())

    @pytest.mark.asyncio
    async def test_resolve_documents_uses_policy(self, dict_source: Any) -> None:
        from swatch.core.ir import ResolutionPolicy

        loaded = await load_documents(dict_source)
        policy = ResolutionPolicy(dimension_type=SemanticType.DIMENSION)
        tokens = _by_key(resolve_documents(loaded, policy))
        assert tokens[("gap.medium", None)].type is SemanticType.DIMENSION


class TestFileSystemSource:
    @pytest.mark.asyncio
    async def test_reads_json_files(self, project_dir: Path) -> None:
        source = FileSystemSource(project_dir / "tokens")
        data = await source.fetch("Sys/Border Radius")
        assert data == {"radius": {"card": {"value": "12", "type": "borderRadius"}}}

    @pytest.mark.asyncio
    async def test_loads_full_set(self, project_dir: Path) -> None:
        tokens = await load_tokens(FileSystemSource(project_dir / "tokens"))
        assert len(tokens) == 13

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(MissingDocumentError) as exc_info:
            await FileSystemSource(tmp_path).fetch("Sys/Nope")
        assert exc_info.value.context is not None
        assert exc_info.value.context.document == "Sys/Nope"

    @pytest.mark.asyncio
    async def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "Bad.json").write_text("{not json")
        with pytest.raises(MalformedDocumentError):
            await FileSystemSource(tmp_path).fetch("Bad")

    @pytest.mark.asyncio
    async def test_non_object_root(self, tmp_path: Path) -> None:
        (tmp_path / "List.json").write_text("[1, 2]")
        with pytest.raises(MalformedDocumentError):
            await FileSystemSource(tmp_path).fetch("List")


class TestHttpSource:
    def _client(self, token_sets: dict[str, Any]) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path.removeprefix("/tokens/").removesuffix(".json")
            if path == "boom":
                raise httpx.ConnectError("refused", request=request)
            if path not in token_sets:
                return httpx.Response(404)
            return httpx.Response(200, text=json.dumps(token_sets[path]))

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    def test_document_url_is_quoted(self) -> None:
        source = HttpSource("http://example.test/tokens/")
        assert source.document_url("Sys/Border Radius") == (
            "http://example.test/tokens/Sys/Border%20Radius.json"
        )

    @pytest.mark.asyncio
    async def test_loads_full_set(self, token_sets: dict[str, Any]) -> None:
        async with self._client(token_sets) as client:
            source = HttpSource("http://example.test/tokens", client=client)
            tokens = await load_tokens(source)
        assert len(tokens) == 13

    @pytest.mark.asyncio
    async def test_http_error_status(self, token_sets: dict[str, Any]) -> None:
        async with self._client(token_sets) as client:
            source = HttpSource("http://example.test/tokens", client=client)
            with pytest.raises(MissingDocumentError, match="404"):
                await source.fetch("Sys/Nope")

    @pytest.mark.asyncio
    async def test_transport_error(self, token_sets: dict[str, Any]) -> None:
        async with self._client(token_sets) as client:
            source = HttpSource("http://example.test/tokens", client=client)
            with pytest.raises(MissingDocumentError):
                await source.fetch("boom")

    @pytest.mark.asyncio
    async def test_one_client_per_load(
        self, token_sets: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        created: list[httpx.AsyncClient] = []
        real_client = httpx.AsyncClient

        class CountingClient(real_client):  # type: ignore[misc, valid-type]
            def __init__(self, *args: Any, **kwargs: Any) -> None:
                super().__init__(*args, **kwargs)
                created.append(self)

        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path.removeprefix("/tokens/").removesuffix(".json")
            if path not in token_sets:
                return httpx.Response(404)
            return httpx.Response(200, text=json.dumps(token_sets[path]))

        monkeypatch.setattr(httpx, "AsyncClient", CountingClient)
        source = HttpSource("http://example.test/tokens", transport=httpx.MockTransport(handler))
        tokens = await load_tokens(source)

        assert len(tokens) == 13
        assert len(created) == 1
        assert created[0].is_closed

    @pytest.mark.asyncio
    async def test_injected_client_is_left_open(self, token_sets: dict[str, Any]) -> None:
        async with self._client(token_sets) as client:
            source = HttpSource("http://example.test/tokens", client=client)
            await load_tokens(source)
            assert not client.is_closed

    @pytest.mark.asyncio
    async def test_fetch_outside_a_session(self, token_sets: dict[str, Any]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text=json.dumps(token_sets["Sys/Border Radius"]))

        source = HttpSource("http://example.test/tokens", transport=httpx.MockTransport(handler))
        data = await source.fetch("Sys/Border Radius")
        assert data == {"radius": {"card": {"value": "12", "type": "borderRadius"}}}
