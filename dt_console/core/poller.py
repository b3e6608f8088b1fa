"""
Status poller.

Drives the status client on a fixed interval and publishes a PollState.
A single asyncio task owns the timer; stop() cancels it along with the fetch
in flight, and bumps the generation so no late result is ever applied.
"""

import asyncio
import logging

from dt_console import config
from dt_console.core.exceptions import FetchError, report_exception
from dt_console.core.models import Error, Loading, PollState, Ready
from dt_console.core.state import StateHolder
from dt_console.core.status_client import StatusClient

log = logging.getLogger(__name__)


class StatusPoller:
    def __init__(self, client: StatusClient, interval: float | None = None):
        self.client = client
        self.interval = interval if interval is not None else config.STATUS_POLL_INTERVAL
        self.state: StateHolder[PollState] = StateHolder(Loading())
        self._generation = 0
        self._running = False
        self._timer: asyncio.Task | None = None
        self._in_flight: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Fetch right away, then every `interval` seconds. Needs a running loop."""
        if self._running:
            return
        self._running = True
        self._generation += 1
        self.state.set(Loading())
        self._timer = asyncio.get_running_loop().create_task(self._run())
        log.info("Status poller started, refreshing every %ss", self.interval)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._in_flight is not None:
            self._in_flight.cancel()
            self._in_flight = None
        log.info("Status poller stopped")

    async def _run(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self.interval)

    async def refresh(self) -> PollState:
        """Fetch once, or wait for the fetch already in flight."""
        if self._in_flight is None or self._in_flight.done():
            self._in_flight = asyncio.ensure_future(self._fetch(self._generation))
        # waiting does not cancel the fetch if the caller is cancelled
        await asyncio.wait({self._in_flight})
        return self.state.value

    async def _fetch(self, generation: int) -> None:
        if self._is_current(generation):
            self.state.set(Loading())
        try:
            snapshot = await self.client.fetch_status()
        except Exception as e:
            if not self._is_current(generation):
                return
            report_exception(e, "Status fetch failed", endpoint=self.client.endpoint)
            if isinstance(e, FetchError):
                self.state.set(Error(str(e)))
            else:
                self.state.set(Error(f"Failed to fetch status: {e!r}"))
            return
        if self._is_current(generation):
            self.state.set(Ready(snapshot))

    def _is_current(self, generation: int) -> bool:
        return self._running and generation == self._generation
