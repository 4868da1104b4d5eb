"""Routing port: abstract interface to an external route-finding service.

The domain asks for candidate itineraries; choosing among them is left to
the caller.
"""

from abc import ABC, abstractmethod

from shipping.cargo.itinerary import Itinerary, RouteSpecification


class RoutingPort(ABC):
    """Abstract interface for routing adapters."""

    @abstractmethod
    def fetch_routes_for_specification(self, route_specification: RouteSpecification) -> list[Itinerary]:
        """Return candidate itineraries for the route specification.

        The list is finite and may be empty. Candidates are not required to
        satisfy the specification; callers check with ``satisfies``.
        """
        ...
