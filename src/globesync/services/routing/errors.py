"""Error taxonomy for the route resolution pipeline."""

from __future__ import annotations


class RoutingError(Exception):
    """Base class for failures scoped to a single route computation."""

    kind = "routing"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RoutingError):
    """Missing or malformed input, raised before any external call."""

    kind = "validation"


class NotFoundError(RoutingError):
    """The geocoding provider returned no match for a place name."""

    kind = "not_found"


class ProviderError(RoutingError):
    """Network failure, timeout or non-success response from a provider."""

    kind = "provider"


class NoRouteError(RoutingError):
    """The routing provider answered but produced no usable route."""

    kind = "no_route"
