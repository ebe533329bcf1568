"""Shared protocol for session storage backends."""

from typing import Optional, Protocol

from skycast.resolution_controller import ResolutionController


class SessionStore(Protocol):
    """Protocol for stores that keep one ResolutionController per client session."""
    def create_session(self, controller: ResolutionController) -> str:
        """Persist a new session and return its id."""

    def get_session(self, session_id: str) -> Optional[ResolutionController]:
        """Fetch a session's controller, returning None if missing or expired."""

    def delete_session(self, session_id: str) -> None:
        """Delete a session without raising if it is absent."""

    def clear(self) -> None:
        """Clear all stored sessions."""
