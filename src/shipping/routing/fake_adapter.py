"""Fake routing adapter: deterministic route finding for tests and development.

By default, candidates are found by searching the sample voyage schedules:
a leg boards a voyage at one of its ports and leaves it at a later port of
the same voyage, and a transfer is possible when the next voyage departs no
earlier than the previous leg arrived. Only itineraries that satisfy the
route specification are returned, earliest arrival first.

Tests can pin the answer per origin with ``configure``.
"""

from shipping.cargo.itinerary import Itinerary, Leg, RouteSpecification, satisfies
from shipping.routing.port import RoutingPort
from shipping.sample_data import SAMPLE_VOYAGES


class FakeRouter(RoutingPort):
    """Schedule-searching router with optional canned answers."""

    def __init__(self, voyages: dict | None = None, max_legs: int = 3):
        self.voyages = voyages if voyages is not None else SAMPLE_VOYAGES
        self.max_legs = max_legs
        self.routes_by_origin: dict[str, list[Itinerary]] | None = None

    def configure(self, routes_by_origin: dict[str, list[Itinerary]] | None = None) -> None:
        """Return these itineraries for specifications starting at the given origin.

        Passing ``None`` restores schedule search.
        """
        self.routes_by_origin = routes_by_origin

    def fetch_routes_for_specification(self, route_specification: RouteSpecification) -> list[Itinerary]:
        if self.routes_by_origin is not None:
            return list(self.routes_by_origin.get(route_specification.origin, []))

        itineraries = [
            Itinerary(legs=legs)
            for legs in self._search(route_specification.origin, route_specification.destination, [], None)
        ]
        candidates = [itinerary for itinerary in itineraries if satisfies(itinerary, route_specification)]
        return sorted(candidates, key=lambda itinerary: itinerary.final_arrival_date)

    # -------------------------------------------------------------------
    # Schedule search
    # -------------------------------------------------------------------
    def _legs_from(self, location: str, not_before):
        """Every leg that can be boarded at ``location`` no earlier than ``not_before``."""
        for voyage_number, movements in self.voyages.items():
            for start, boarding in enumerate(movements):
                if boarding["departure_location"] != location:
                    continue
                if not_before is not None and boarding["departure_time"] < not_before:
                    continue
                for leaving in movements[start:]:
                    yield Leg(
                        voyage_number=voyage_number,
                        load_location=location,
                        unload_location=leaving["arrival_location"],
                        load_time=boarding["departure_time"],
                        unload_time=leaving["arrival_time"],
                    )

    def _search(self, location: str, destination: str, legs: list[Leg], not_before):
        if location == destination and legs:
            yield list(legs)
            return
        if len(legs) >= self.max_legs:
            return

        visited = {leg.load_location for leg in legs}
        for leg in self._legs_from(location, not_before):
            if leg.unload_location in visited or leg.unload_location == location:
                continue
            legs.append(leg)
            yield from self._search(leg.unload_location, destination, legs, leg.unload_time)
            legs.pop()
