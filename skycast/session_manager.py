"""Session manager facade: one ResolutionController per client session."""
from typing import Optional

from skycast.config import settings
from skycast.data_sources import build_geocoding_source, build_weather_source
from skycast.resolution_controller import ResolutionController
from skycast.session_store import InMemorySessionStore, SessionStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session_manager")

_store: SessionStore = InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)

# Provider clients are stateless, so all sessions share them.
GEOCODER = build_geocoding_source(settings)
WEATHER = build_weather_source(settings)


def use_in_memory_store_for_tests(ttl_seconds: int = 3600) -> None:
    """Override store for tests to ensure isolation and determinism."""
    global _store
    _store = InMemorySessionStore(ttl_seconds=ttl_seconds)


def new_controller() -> ResolutionController:
    """Build a controller wired to the shared providers and the default unit."""
    return ResolutionController(GEOCODER, WEATHER, unit=settings.default_unit)


def create_session(controller: Optional[ResolutionController] = None) -> str:
    """Create and store a new session, returning its ID."""
    sid = _store.create_session(controller or new_controller())
    logger.info("Created session", extra={"session_id": sid})
    return sid


def get_session(session_id: str) -> Optional[ResolutionController]:
    """Fetch a session's controller by ID, refreshing TTL."""
    return _store.get_session(session_id)


def delete_session(session_id: str) -> None:
    """Delete a session by ID."""
    _store.delete_session(session_id)


def clear_sessions() -> None:
    """Clear all sessions from the backing store (dev/testing)."""
    _store.clear()
