"""HTTP API for the location-to-weather service."""

import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, Field

from skycast.config import settings
from skycast.domain import Coordinates, ResolutionState, TemperatureUnit
from skycast.presentation import WeatherView, present
from skycast.resolution_controller import ResolutionController
from .session_manager import create_session, delete_session, get_session
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the configured static key, if any."""
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])


class SearchRequest(BaseModel):
    """Free-text place name to resolve."""
    query: str


class UnitRequest(BaseModel):
    """Display unit to switch to."""
    unit: TemperatureUnit


class CoordinatesRequest(BaseModel):
    """Explicit coordinates that bypass geocoding."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class SessionResponse(BaseModel):
    """Current state of a session plus its display-ready view."""
    session_id: str
    unit: TemperatureUnit
    state: ResolutionState
    coordinates: Coordinates | None = None
    view: WeatherView


def _require_session(session_id: str) -> ResolutionController:
    controller = get_session(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail="Unknown session ID")
    return controller


def _session_response(session_id: str, controller: ResolutionController) -> SessionResponse:
    return SessionResponse(
        session_id=session_id,
        unit=controller.unit,
        state=controller.state,
        coordinates=controller.coordinates,
        view=present(controller.state, controller.unit),
    )


@router.post("/session/start", response_model=SessionResponse)
def start_session():
    """Create a session in the Idle state."""
    session_id = create_session()
    controller = _require_session(session_id)
    return _session_response(session_id, controller)


@router.get("/session/{session_id}", response_model=SessionResponse)
def read_session(session_id: str):
    """Return the session's current state and view."""
    return _session_response(session_id, _require_session(session_id))


@router.delete("/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def end_session(session_id: str):
    """Forget a session."""
    _require_session(session_id)
    delete_session(session_id)


@router.post("/session/{session_id}/search", response_model=SessionResponse)
async def search(session_id: str, req: SearchRequest):
    """Geocode the query, fetch its weather and return the resulting state."""
    controller = _require_session(session_id)

    if len(req.query) > settings.max_query_chars:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail=f"Query too long; limit {settings.max_query_chars} characters.")

    await controller.search(req.query)
    return _session_response(session_id, controller)


@router.post("/session/{session_id}/coordinates", response_model=SessionResponse)
async def set_coordinates(session_id: str, req: CoordinatesRequest):
    """Fetch weather for explicit coordinates."""
    controller = _require_session(session_id)
    await controller.set_coordinates(Coordinates(latitude=req.latitude, longitude=req.longitude))
    return _session_response(session_id, controller)


@router.post("/session/{session_id}/unit/toggle", response_model=SessionResponse)
def toggle_unit(session_id: str):
    """Flip between Celsius and Fahrenheit without re-fetching."""
    controller = _require_session(session_id)
    controller.toggle_unit()
    return _session_response(session_id, controller)


@router.post("/session/{session_id}/unit", response_model=SessionResponse)
def set_unit(session_id: str, req: UnitRequest):
    """Set the display unit without re-fetching."""
    controller = _require_session(session_id)
    controller.set_unit(req.unit)
    return _session_response(session_id, controller)
