"""Debounced interactive search sessions."""

# Searches start only once typing pauses; late results for older queries are dropped.

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from moviemax.core.config import get_settings
from moviemax.services.models import MovieSummary, unique_by_id


logger = logging.getLogger(__name__)

SearchFunc = Callable[[str], Awaitable[list[MovieSummary]]]
SettledListener = Callable[[str, list[MovieSummary]], Awaitable[None]]


class SearchState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    LOADING = "loading"
    SETTLED = "settled"


class CancellableTimer:
    """One-shot callback scheduled on the running event loop.

    ``cancel`` may be called any number of times and does nothing once the
    timer has fired.
    """

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._fired = False
        self._cancelled = False
        self._handle = asyncio.get_running_loop().call_later(delay, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._fired = True
        self._callback()

    @property
    def pending(self) -> bool:
        return not (self._fired or self._cancelled)

    def cancel(self) -> None:
        if not self.pending:
            return
        self._cancelled = True
        self._handle.cancel()


class SearchSession:
    """Search state for one interactive client.

    Each ``set_query`` call restarts the debounce timer, so a query edited
    faster than ``delay`` never reaches the network. Requests that already
    started run to completion, but only the newest query may publish results.
    """

    def __init__(
        self,
        search: SearchFunc,
        *,
        delay: float | None = None,
        on_settled: SettledListener | None = None,
    ) -> None:
        self._search = search
        self.delay = get_settings().search_debounce_seconds if delay is None else delay
        self._on_settled = on_settled
        self.state = SearchState.IDLE
        self.query = ""
        self.results: list[MovieSummary] = []
        self._timer: CancellableTimer | None = None
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    def set_query(self, query: str) -> SearchState:
        if self._closed:
            raise RuntimeError("search session is closed")
        self._cancel_timer()
        self._generation += 1
        self.query = query
        if not query.strip():
            self.state = SearchState.IDLE
            self.results = []
            return self.state
        generation = self._generation
        self.state = SearchState.DEBOUNCING
        self._timer = CancellableTimer(self.delay, lambda: self._start(query, generation))
        return self.state

    def close(self) -> None:
        """Stop the pending timer and drop whatever is still in flight."""

        self._cancel_timer()
        self._generation += 1
        self._closed = True

    async def drain(self) -> None:
        """Wait for requests that have already started."""

        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _start(self, query: str, generation: int) -> None:
        self._timer = None
        self.state = SearchState.LOADING
        task = asyncio.get_running_loop().create_task(self._load(query, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _load(self, query: str, generation: int) -> None:
        try:
            results = unique_by_id(await self._search(query))
        except Exception:
            logger.exception("Error searching movies for %r", query)
            results = []
        if generation != self._generation:
            logger.debug("Discarding stale results for %r", query)
            return
        self.results = results
        self.state = SearchState.SETTLED
        if self._on_settled is None:
            return
        try:
            await self._on_settled(query, results)
        except Exception:
            logger.exception("Search listener failed for %r", query)
