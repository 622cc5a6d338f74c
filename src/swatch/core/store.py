"""
In-memory token store.

Holds the last resolved token list. ``load()`` runs the loader at most
once per store (or per ``reset()``); callers that arrive while a load is
in flight await the same task. A failed or empty load never raises: the
store serves the built-in sample tokens instead.

Stores are plain objects so tests and servers can each own one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from enum import StrEnum

from .defaults import DEFAULT_TOKENS
from .errors import DocumentError
from .ir import DEFAULT_POLICY, DocumentSpec, ResolutionPolicy, ResolvedToken
from .loader import DEFAULT_DOCUMENTS, load_tokens
from .sources import ContentSource

logger = logging.getLogger(__name__)

TokenLoader = Callable[[], Awaitable[list[ResolvedToken]]]


class StoreState(StrEnum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"


class TokenStore:
    """Load-once cache of resolved tokens."""

    def __init__(
        self,
        loader: TokenLoader,
        defaults: Iterable[ResolvedToken] = DEFAULT_TOKENS,
    ):
        self._loader = loader
        self._defaults = tuple(defaults)
        self._tokens: tuple[ResolvedToken, ...] = ()
        self._state = StoreState.EMPTY
        self._inflight: asyncio.Task[list[ResolvedToken]] | None = None
        self._generation = 0
        self.used_defaults = False

    @classmethod
    def from_source(
        cls,
        source: ContentSource,
        documents: Sequence[DocumentSpec] = DEFAULT_DOCUMENTS,
        policy: ResolutionPolicy = DEFAULT_POLICY,
    ) -> TokenStore:
        """Build a store that loads ``documents`` from ``source``."""

        async def _load() -> list[ResolvedToken]:
            return await load_tokens(source, documents, policy)

        return cls(_load)

    @property
    def state(self) -> StoreState:
        return self._state

    def is_loaded(self) -> bool:
        return self._state is StoreState.LOADED

    def get(self) -> list[ResolvedToken]:
        """Current token list (empty until the first load completes)."""
        return list(self._tokens)

    async def load(self) -> list[ResolvedToken]:
        """Load tokens once; later and concurrent calls share the result."""
        if self._state is StoreState.LOADED:
            return self.get()
        if self._inflight is None:
            self._state = StoreState.LOADING
            self._inflight = asyncio.ensure_future(self._run(self._generation))
        # shield: a cancelled caller must not cancel the shared load
        return await asyncio.shield(self._inflight)

    def reset(self) -> None:
        """Forget the cached list; the next ``load()`` starts over."""
        self._generation += 1
        self._tokens = ()
        self._state = StoreState.EMPTY
        self._inflight = None
        self.used_defaults = False

    async def _run(self, generation: int) -> list[ResolvedToken]:
        used_defaults = False
        try:
            tokens = await self._loader()
            if not tokens:
                logger.warning(
                    "Token load produced no tokens; serving %d built-in tokens",
                    len(self._defaults),
                )
                tokens, used_defaults = list(self._defaults), True
        except DocumentError as e:
            logger.warning(
                "Token load failed (%s); serving %d built-in tokens", e.message, len(self._defaults)
            )
            tokens, used_defaults = list(self._defaults), True
        except Exception:
            logger.exception(
                "Unexpected error while loading tokens; serving %d built-in tokens",
                len(self._defaults),
            )
            tokens, used_defaults = list(self._defaults), True

        if generation == self._generation:
            self._tokens = tuple(tokens)
            self._state = StoreState.LOADED
            self._inflight = None
            self.used_defaults = used_defaults
        return list(tokens)
