"""Failures raised by the provider clients and caught by the controller."""

from skycast.domain import FailureReason


class ResolutionError(Exception):
    """Base class for errors that end a resolution cycle."""
    reason: FailureReason = FailureReason.NETWORK_ERROR


class NotFoundError(ResolutionError):
    """The geocoding provider returned no candidates for the query."""
    reason = FailureReason.NOT_FOUND


class NetworkError(ResolutionError):
    """The call could not complete or returned a non-success status."""
    reason = FailureReason.NETWORK_ERROR


class MalformedResponseError(ResolutionError):
    """The provider answered, but not with the fields we rely on."""
    reason = FailureReason.MALFORMED_RESPONSE
