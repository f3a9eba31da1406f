"""Debounced catalog search driven by keystrokes."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from calorie_tracker.domain.food import LoggedFoodEntry

DEFAULT_DEBOUNCE_SECONDS = 0.5

_logger = logging.getLogger(__name__)

SearchLookup = Callable[[str], Awaitable[list[LoggedFoodEntry]]]
ResultsListener = Callable[[int, list[LoggedFoodEntry]], Awaitable[None]]


@dataclass
class DebouncedSearch:
    """Issue a lookup once input has been idle for delay_seconds.

    Each submitted query gets a new sequence number. A lookup only delivers
    its results when its sequence number is still the latest one, so a slow
    response can never overwrite the results of a newer query.
    """

    lookup: SearchLookup
    on_results: ResultsListener | None = None
    delay_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    results: list[LoggedFoodEntry] = field(default_factory=list)
    loading: bool = False
    _sequence: int = field(default=0, init=False)
    _task: asyncio.Task[None] | None = field(default=None, init=False)

    @property
    def latest_sequence(self) -> int:
        """Return the sequence number of the most recent submission."""
        return self._sequence

    def submit(self, query: str) -> int:
        """Restart the debounce timer for a new query; must run inside a loop."""
        self._sequence += 1
        sequence = self._sequence
        self._cancel_pending()
        if not query.strip():
            self.loading = False
            return sequence
        self._task = asyncio.get_running_loop().create_task(
            self._run(sequence, query)
        )
        return sequence

    async def wait(self) -> None:
        """Wait for the currently scheduled lookup, if any."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def aclose(self) -> None:
        """Cancel pending work."""
        self._cancel_pending()
        await self.wait()
        self._task = None

    async def _run(self, sequence: int, query: str) -> None:
        await asyncio.sleep(self.delay_seconds)
        self.loading = True
        try:
            found = await self.lookup(query)
        except Exception:
            _logger.exception("Search lookup failed for %s", query)
            found = []
        if sequence != self._sequence:
            _logger.debug("Dropping stale results for %s (seq=%s)", query, sequence)
            return
        self.loading = False
        self.results = found
        if self.on_results is None:
            return
        try:
            await self.on_results(sequence, found)
        except Exception:
            _logger.exception("Search results listener failed (seq=%s)", sequence)

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
