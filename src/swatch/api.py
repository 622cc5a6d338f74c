"""
Token HTTP routes.

Read-only routes over a ``TokenStore``:
- GET /api/health - liveness plus store state
- GET /api/tokens/list - UI summary list (optional type/mode/search filters)
- GET /api/tokens/stats - counts per family
- GET /api/export/{platform} - generated files for one platform, not written to disk

Every route awaits ``store.load()`` first, so the first request triggers
the single shared load.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException, Query
from pydantic import BaseModel

from .core.errors import ExportError
from .core.ir import ColorMode, SemanticType
from .core.queries import filter_tokens, search_tokens, summarize, token_stats
from .core.store import TokenStore
from .exporters import get_exporter


class HealthResponse(BaseModel):
    status: str
    state: str
    tokens: int
    usingDefaults: bool


class ExportResponse(BaseModel):
    platform: str
    files: list[dict[str, str]]
    warnings: list[str]


def create_token_router(store: TokenStore, **export_options: Any) -> APIRouter:
    """
    Create the token routes.

    Args:
        store: Store the routes read from
        **export_options: Passed to exporters (``android_package``, ``title``)

    Returns:
        FastAPI APIRouter mounted under /api
    """
    router = APIRouter(prefix="/api", tags=["Tokens"])

    @router.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        tokens = await store.load()
        return HealthResponse(
            status="ok",
            state=store.state.value,
            tokens=len(tokens),
            usingDefaults=store.used_defaults,
        )

    @router.get("/tokens/list")
    async def list_tokens(
        type: SemanticType | None = Query(None, description="Semantic type filter"),
        mode: ColorMode | None = Query(None, description="Color mode filter"),
        search: str | None = Query(None, description="Name/value/description substring"),
    ) -> list[dict[str, Any]]:
        tokens = filter_tokens(await store.load(), type=type, mode=mode)
        if search:
            tokens = search_tokens(tokens, search)
        return summarize(tokens)

    @router.get("/tokens/stats")
    async def stats() -> dict[str, Any]:
        return token_stats(await store.load())

    @router.get("/export/{platform}", response_model=ExportResponse)
    async def export(platform: str) -> ExportResponse:
        try:
            exporter = get_exporter(platform, **export_options)
        except ExportError as e:
            raise HTTPException(status_code=404, detail=e.message) from e
        result = exporter.export(await store.load())
        return ExportResponse(
            platform=result.platform,
            files=[e.to_dict() for e in result.exports],
            warnings=result.warnings,
        )

    return router


def create_app(store: TokenStore, **export_options: Any) -> FastAPI:
    """FastAPI application serving the token routes."""
    from . import __version__

    app = FastAPI(title="swatch", version=__version__)
    app.include_router(create_token_router(store, **export_options))
    return app
