"""Route specification, itinerary, and the itinerary matcher.

A RouteSpecification states what the customer asked for: get the cargo from
``origin`` to ``destination`` before ``arrival_deadline``. An Itinerary is one
concrete plan for doing so, a chain of voyage legs. The matcher answers two
questions about a plan:

- does it satisfy the route specification? (``satisfies``)
- is a given handling event consistent with it? (``is_expected``)

Both are pure functions of their arguments.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, List, String, ValueObject

from shipping.domain import shipping
from shipping.handling.handling_event import HandlingEventType
from shipping.utils.clock import is_naive


@shipping.value_object(part_of="Cargo")
class RouteSpecification:
    """Where the cargo must go, and by when."""

    origin = String(required=True, max_length=5)
    destination = String(required=True, max_length=5)
    arrival_deadline = DateTime(required=True)

    @invariant.post
    def deadline_must_carry_timezone(self):
        if is_naive(self.arrival_deadline):
            raise ValidationError({"arrival_deadline": ["The arrival deadline must carry a timezone"]})

    @invariant.post
    def origin_and_destination_must_differ(self):
        if self.origin is not None and self.origin == self.destination:
            raise ValidationError({"destination": ["Origin and destination cannot be the same location"]})

    def is_satisfied_by(self, itinerary) -> bool:
        return satisfies(itinerary, self)


@shipping.value_object(part_of="Cargo")
class Leg:
    """One voyage segment of an itinerary."""

    voyage_number = String(required=True, max_length=20)
    load_location = String(required=True, max_length=5)
    unload_location = String(required=True, max_length=5)
    load_time = DateTime(required=True)
    unload_time = DateTime(required=True)

    @invariant.post
    def leg_times_must_be_aware_and_ordered(self):
        for field_name in ("load_time", "unload_time"):
            if is_naive(getattr(self, field_name)):
                raise ValidationError({field_name: ["Leg times must carry a timezone"]})
        if self.load_time and self.unload_time and self.unload_time < self.load_time:
            raise ValidationError({"unload_time": ["A leg cannot be unloaded before it is loaded"]})


@shipping.value_object(part_of="Cargo")
class Itinerary:
    """An ordered, continuous chain of legs."""

    legs = List(content_type=ValueObject(Leg), required=True)

    @invariant.post
    def legs_must_be_continuous(self):
        legs = self.legs or []
        if not legs:
            raise ValidationError({"legs": ["An itinerary needs at least one leg"]})
        for index, (previous, current) in enumerate(zip(legs, legs[1:]), start=1):
            if previous.unload_location != current.load_location:
                raise ValidationError(
                    {
                        "legs": [
                            f"Leg {index} loads at {current.load_location} "
                            f"but the previous leg unloads at {previous.unload_location}"
                        ]
                    }
                )

    @property
    def first_leg(self) -> Leg:
        return self.legs[0]

    @property
    def last_leg(self) -> Leg:
        return self.legs[-1]

    @property
    def initial_departure_location(self) -> str:
        return self.first_leg.load_location

    @property
    def final_arrival_location(self) -> str:
        return self.last_leg.unload_location

    @property
    def final_arrival_date(self):
        return self.last_leg.unload_time

    def leg_after(self, leg: Leg) -> Leg | None:
        """The leg following ``leg``, or ``None`` if ``leg`` is the last one."""
        for current, following in zip(self.legs, self.legs[1:]):
            if current == leg:
                return following
        return None


# ---------------------------------------------------------------------------
# Matcher
# ---------------------------------------------------------------------------
def satisfies(itinerary: Itinerary | None, route_specification: RouteSpecification) -> bool:
    """True if the itinerary fully honours the route specification.

    The itinerary must start at the origin, end at the destination, and
    arrive no later than the deadline. There is no partial credit.
    """
    if itinerary is None or not itinerary.legs:
        return False
    return (
        itinerary.initial_departure_location == route_specification.origin
        and itinerary.final_arrival_location == route_specification.destination
        and itinerary.final_arrival_date <= route_specification.arrival_deadline
    )


def find_leg(itinerary: Itinerary, event) -> Leg | None:
    """The leg a load or unload event belongs to, matched on location and voyage."""
    event_type = HandlingEventType(event.event_type)
    for leg in itinerary.legs:
        if leg.voyage_number != event.voyage_number:
            continue
        if event_type == HandlingEventType.LOAD and leg.load_location == event.location:
            return leg
        if event_type == HandlingEventType.UNLOAD and leg.unload_location == event.location:
            return leg
    return None


def is_expected(event, itinerary: Itinerary | None) -> bool:
    """True if a single handling event is consistent with the itinerary.

    The check looks at the event alone, not at where it sits in the history.
    Without an itinerary nothing is expected.
    """
    if itinerary is None or not itinerary.legs:
        return False

    event_type = HandlingEventType(event.event_type)
    if event_type == HandlingEventType.RECEIVE:
        return event.location == itinerary.initial_departure_location
    if event_type in (HandlingEventType.LOAD, HandlingEventType.UNLOAD):
        return find_leg(itinerary, event) is not None
    if event_type == HandlingEventType.CLAIM:
        return event.location == itinerary.final_arrival_location
    # Customs can happen anywhere along the way
    return True
