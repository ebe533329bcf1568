"""Single owned container for the live resolution state and display unit."""
from __future__ import annotations

from typing import Callable, List

from skycast.domain import Idle, ResolutionState, TemperatureUnit
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="state_store")

Listener = Callable[[ResolutionState, TemperatureUnit], None]


class ResolutionStore:
    """
    Holds exactly one ResolutionState plus the active TemperatureUnit.

    Readers (presentation, API handlers) get the store by reference and may
    subscribe to changes. Only ResolutionController calls `publish`.
    """

    def __init__(self, unit: TemperatureUnit | str = TemperatureUnit.CELSIUS) -> None:
        self._state: ResolutionState = Idle()
        self._unit = TemperatureUnit(unit)
        self._listeners: List[Listener] = []

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def unit(self) -> TemperatureUnit:
        return self._unit

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, *, state: ResolutionState | None = None, unit: TemperatureUnit | None = None) -> None:
        """Replace the state and/or unit and notify subscribers."""
        if state is not None:
            self._state = state
        if unit is not None:
            self._unit = TemperatureUnit(unit)
        for listener in list(self._listeners):
            try:
                listener(self._state, self._unit)
            except Exception:
                logger.exception("State listener failed")
