"""Orchestrates geocoding -> weather and owns the resolution state machine.

States move Idle -> Loading -> Ready | Failed -> Loading -> ... Every cycle is
tagged with a generation number; a result is committed only if its cycle is
still the newest one, so a slow answer for an old query can never overwrite
the state of a newer search.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Set

from skycast.data_sources.base import GeocodingSource, WeatherSource
from skycast.domain import (
    Coordinates,
    Failed,
    FailureReason,
    Loading,
    Ready,
    ResolutionState,
    TemperatureUnit,
)
from skycast.errors import ResolutionError
from skycast.state_store import ResolutionStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="resolution_controller")


class ResolutionController:
    """Sole writer of a ResolutionStore; runs on a single event loop."""

    def __init__(
        self,
        geocoder: GeocodingSource,
        weather: WeatherSource,
        *,
        store: ResolutionStore | None = None,
        unit: TemperatureUnit | str = TemperatureUnit.CELSIUS,
    ) -> None:
        self._geocoder = geocoder
        self._weather = weather
        self.store = store or ResolutionStore(unit=unit)
        self._generation = 0
        self._coordinates: Optional[Coordinates] = None
        self._pending: Set[asyncio.Task] = set()

    @property
    def state(self) -> ResolutionState:
        return self.store.state

    @property
    def unit(self) -> TemperatureUnit:
        return self.store.unit

    @property
    def coordinates(self) -> Optional[Coordinates]:
        return self._coordinates

    @property
    def generation(self) -> int:
        return self._generation

    # -- state transitions -------------------------------------------------

    def _begin_cycle(self) -> int:
        """Start a new generation and move to Loading."""
        self._generation += 1
        self.store.publish(state=Loading())
        logger.debug("Started resolution cycle", extra={"generation": self._generation})
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _transition(self, state: ResolutionState, generation: int) -> bool:
        """Commit `state` if `generation` is still current; report whether it was."""
        if not self._is_current(generation):
            logger.debug(
                "Dropping result of superseded cycle",
                extra={"generation": generation, "current": self._generation, "status": state.status},
            )
            return False
        self.store.publish(state=state)
        logger.info("Resolution state changed", extra={"generation": generation, "status": state.status})
        return True

    def _fail(self, exc: BaseException, generation: int, *, stage: str) -> None:
        if isinstance(exc, ResolutionError):
            reason = exc.reason
            logger.warning(
                "Resolution cycle failed",
                extra={"stage": stage, "reason": reason.value, "error": str(exc)},
            )
        else:
            reason = FailureReason.NETWORK_ERROR
            logger.exception("Unexpected error during %s", stage)
        self._transition(Failed(reason=reason), generation)

    def _abandon(self, generation: int) -> None:
        """Leave Loading when the current cycle is cancelled before it settles."""
        if self._is_current(generation) and isinstance(self.state, Loading):
            logger.warning("Resolution cycle cancelled", extra={"generation": generation})
            self._transition(Failed(reason=FailureReason.NETWORK_ERROR), generation)

    # -- weather fetch (reacts to coordinate changes) ----------------------

    def _apply_coordinates(self, coords: Coordinates, generation: int) -> asyncio.Task:
        """Store `coords` and enqueue the weather fetch for that cycle."""
        self._coordinates = coords
        task = asyncio.get_running_loop().create_task(self._fetch_weather(coords, generation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        task.add_done_callback(lambda t: self._on_fetch_done(t, generation))
        return task

    def _on_fetch_done(self, task: asyncio.Task, generation: int) -> None:
        if task.cancelled():
            self._abandon(generation)

    async def _fetch_weather(self, coords: Coordinates, generation: int) -> None:
        try:
            snapshot = await self._weather.fetch(coords)
        except Exception as exc:
            self._fail(exc, generation, stage="weather")
            return
        self._transition(Ready(snapshot=snapshot), generation)

    # -- public operations -------------------------------------------------

    def set_coordinates(self, coords: Coordinates) -> asyncio.Task:
        """
        Start a cycle for explicit coordinates.

        Any new coordinate set re-triggers the weather fetch, even without a
        search. Returns the fetch task so callers can await it.
        """
        generation = self._begin_cycle()
        return self._apply_coordinates(coords, generation)

    async def search(self, query: str) -> ResolutionState:
        """
        Run a full geocode -> weather cycle for `query` and return the state
        afterwards. A blank query does nothing.
        """
        query = (query or "").strip()
        if not query:
            logger.debug("Ignoring empty query")
            return self.state

        generation = self._begin_cycle()
        logger.info("Searching location", extra={"query": query, "generation": generation})
        try:
            coords = await self._geocoder.resolve(query)
        except asyncio.CancelledError:
            self._abandon(generation)
            raise
        except Exception as exc:
            self._fail(exc, generation, stage="geocoding")
            return self.state

        if not self._is_current(generation):
            logger.debug("Discarding coordinates from superseded search", extra={"query": query})
            return self.state

        try:
            await self._apply_coordinates(coords, generation)
        except asyncio.CancelledError:
            self._abandon(generation)
            raise
        return self.state

    async def wait_idle(self) -> None:
        """Wait for every weather fetch enqueued so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def set_unit(self, unit: TemperatureUnit | str) -> TemperatureUnit:
        """Change the display unit; never touches the network."""
        self.store.publish(unit=TemperatureUnit(unit))
        return self.unit

    def toggle_unit(self) -> TemperatureUnit:
        """Flip C <-> F; never touches the network."""
        return self.set_unit(self.unit.other())


def main():
    """Manual lookup helper: python -m skycast.resolution_controller Kraków"""
    import sys

    from skycast.data_sources import build_geocoding_source, build_weather_source
    from skycast.presentation import present

    query = " ".join(sys.argv[1:]) or "Kraków"
    controller = ResolutionController(build_geocoding_source(), build_weather_source())
    asyncio.run(controller.search(query))
    print(present(controller.state, controller.unit).model_dump_json(indent=2))


if __name__ == "__main__":
    main()
