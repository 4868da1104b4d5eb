"""Delivery snapshot and the derivation engine that produces it.

A Delivery is never edited. ``derive_delivery`` computes a fresh one from the
complete current inputs (route specification, itinerary if any, handling
history) every time any of them changes.

Transport status follows the most recently completed handling event:

    (no events) → NOT_RECEIVED
    Receive     → IN_PORT
    Load        → ONBOARD_CARRIER
    Unload      → IN_PORT
    Customs     → IN_PORT
    Claim       → CLAIMED (terminal)

Misdirection compares the most recently completed event with the *current*
itinerary. Assigning a new itinerary therefore re-judges an unchanged
history, which is how a reroute clears a misdirected cargo.
"""

from enum import Enum

from protean.fields import Boolean, DateTime, String

from shipping.cargo.itinerary import Itinerary, RouteSpecification, find_leg, is_expected, satisfies
from shipping.domain import shipping
from shipping.handling.handling_event import HandlingEventType, HandlingHistory


class TransportStatus(Enum):
    NOT_RECEIVED = "Not_Received"
    IN_PORT = "In_Port"
    ONBOARD_CARRIER = "Onboard_Carrier"
    CLAIMED = "Claimed"


class RoutingStatus(Enum):
    NOT_ROUTED = "Not_Routed"
    ROUTED = "Routed"
    MISROUTED = "Misrouted"


_TRANSPORT_STATUS_AFTER = {
    HandlingEventType.RECEIVE: TransportStatus.IN_PORT,
    HandlingEventType.LOAD: TransportStatus.ONBOARD_CARRIER,
    HandlingEventType.UNLOAD: TransportStatus.IN_PORT,
    HandlingEventType.CUSTOMS: TransportStatus.IN_PORT,
    HandlingEventType.CLAIM: TransportStatus.CLAIMED,
}


@shipping.value_object(part_of="Cargo")
class HandlingActivity:
    """A handling step the cargo is expected to go through next."""

    event_type = String(required=True, choices=HandlingEventType)
    location = String(required=True, max_length=5)
    voyage_number = String(max_length=20)


@shipping.value_object(part_of="Cargo")
class Delivery:
    """Read-only snapshot of where the cargo is and how it is doing."""

    transport_status = String(required=True, choices=TransportStatus)
    routing_status = String(required=True, choices=RoutingStatus)
    last_known_location = String(max_length=5)
    current_voyage = String(max_length=20)
    is_misdirected = Boolean(default=False)
    eta = DateTime()
    is_unloaded_at_destination = Boolean(default=False)

    # Next expected activity, flattened
    next_activity_type = String(choices=HandlingEventType)
    next_activity_location = String(max_length=5)
    next_activity_voyage = String(max_length=20)

    @property
    def next_expected_activity(self) -> HandlingActivity | None:
        if not self.next_activity_type:
            return None
        return HandlingActivity(
            event_type=self.next_activity_type,
            location=self.next_activity_location,
            voyage_number=self.next_activity_voyage,
        )


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------
def _routing_status(route_specification, itinerary) -> RoutingStatus:
    if itinerary is None:
        return RoutingStatus.NOT_ROUTED
    if satisfies(itinerary, route_specification):
        return RoutingStatus.ROUTED
    return RoutingStatus.MISROUTED


def _next_expected_activity(itinerary: Itinerary, last_event) -> HandlingActivity | None:
    if last_event is None:
        return HandlingActivity(
            event_type=HandlingEventType.RECEIVE.value,
            location=itinerary.initial_departure_location,
        )

    event_type = HandlingEventType(last_event.event_type)

    if event_type == HandlingEventType.RECEIVE:
        if last_event.location != itinerary.initial_departure_location:
            return None
        first_leg = itinerary.first_leg
        return HandlingActivity(
            event_type=HandlingEventType.LOAD.value,
            location=first_leg.load_location,
            voyage_number=first_leg.voyage_number,
        )

    if event_type == HandlingEventType.LOAD:
        leg = find_leg(itinerary, last_event)
        if leg is None:
            return None
        return HandlingActivity(
            event_type=HandlingEventType.UNLOAD.value,
            location=leg.unload_location,
            voyage_number=leg.voyage_number,
        )

    if event_type == HandlingEventType.UNLOAD:
        leg = find_leg(itinerary, last_event)
        if leg is None:
            return None
        next_leg = itinerary.leg_after(leg)
        if next_leg is None:
            return HandlingActivity(
                event_type=HandlingEventType.CLAIM.value,
                location=leg.unload_location,
            )
        return HandlingActivity(
            event_type=HandlingEventType.LOAD.value,
            location=next_leg.load_location,
            voyage_number=next_leg.voyage_number,
        )

    # Customs and anything unmatched: no confident prediction
    return None


def derive_delivery(
    route_specification: RouteSpecification,
    itinerary: Itinerary | None,
    history,
) -> Delivery:
    """Derive the delivery snapshot from complete current inputs.

    ``history`` is a HandlingHistory or any iterable of handling events; it
    is put into canonical order here. The function never raises for
    well-formed inputs and has no side effects.
    """
    if not isinstance(history, HandlingHistory):
        history = HandlingHistory(history)
    last_event = history.most_recently_completed_event

    routing_status = _routing_status(route_specification, itinerary)

    if last_event is None:
        transport_status = TransportStatus.NOT_RECEIVED
        last_known_location = None
        current_voyage = None
    else:
        last_type = HandlingEventType(last_event.event_type)
        transport_status = _TRANSPORT_STATUS_AFTER[last_type]
        last_known_location = last_event.location
        current_voyage = last_event.voyage_number if last_type == HandlingEventType.LOAD else None

    is_misdirected = itinerary is not None and last_event is not None and not is_expected(last_event, itinerary)

    eta = itinerary.final_arrival_date if routing_status == RoutingStatus.ROUTED else None

    next_activity = None
    if (
        routing_status == RoutingStatus.ROUTED
        and not is_misdirected
        and transport_status != TransportStatus.CLAIMED
    ):
        next_activity = _next_expected_activity(itinerary, last_event)

    is_unloaded_at_destination = (
        last_event is not None
        and HandlingEventType(last_event.event_type) == HandlingEventType.UNLOAD
        and last_event.location == route_specification.destination
    )

    return Delivery(
        transport_status=transport_status.value,
        routing_status=routing_status.value,
        last_known_location=last_known_location,
        current_voyage=current_voyage,
        is_misdirected=is_misdirected,
        eta=eta,
        is_unloaded_at_destination=is_unloaded_at_destination,
        next_activity_type=next_activity.event_type if next_activity else None,
        next_activity_location=next_activity.location if next_activity else None,
        next_activity_voyage=next_activity.voyage_number if next_activity else None,
    )
