"""Interfaces the resolution controller needs from its providers."""

from __future__ import annotations

from typing import Protocol

from skycast.domain import Coordinates, WeatherSnapshot


class GeocodingSource(Protocol):
    """Anything that can turn a free-text query into coordinates."""

    async def resolve(self, query: str) -> Coordinates:
        """Return the best match, or raise NotFoundError / NetworkError / MalformedResponseError."""
        ...


class WeatherSource(Protocol):
    """Anything that can produce a normalized snapshot for coordinates."""

    async def fetch(self, coords: Coordinates) -> WeatherSnapshot:
        """Return the snapshot, or raise NetworkError / MalformedResponseError."""
        ...
