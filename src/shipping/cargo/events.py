"""Cargo domain events: immutable facts about a cargo's booking and progress.

Every mutation of a Cargo ends with ``DeliveryProgressUpdated``, which carries
the freshly derived delivery snapshot. It is the notification point for
read models and alerting.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from shipping.domain import shipping


@shipping.event(part_of="Cargo")
class CargoBooked:
    """A new cargo was booked for transport."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    origin = String(required=True)
    destination = String(required=True)
    arrival_deadline = DateTime(required=True)
    booked_at = DateTime(required=True)


@shipping.event(part_of="Cargo")
class CargoAssignedToRoute:
    """An itinerary was assigned to the cargo, replacing any previous one."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    leg_count = Integer(required=True)
    initial_departure_location = String(required=True)
    final_arrival_location = String(required=True)
    final_arrival_date = DateTime(required=True)
    assigned_at = DateTime(required=True)


@shipping.event(part_of="Cargo")
class CargoRouteSpecified:
    """The cargo's route specification was replaced (rerouting)."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    origin = String(required=True)
    destination = String(required=True)
    arrival_deadline = DateTime(required=True)
    specified_at = DateTime(required=True)


@shipping.event(part_of="Cargo")
class DeliveryProgressUpdated:
    """The cargo's delivery snapshot was re-derived."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    transport_status = String(required=True)
    routing_status = String(required=True)
    last_known_location = String()
    current_voyage = String()
    is_misdirected = Boolean(required=True)
    eta = DateTime()
    is_unloaded_at_destination = Boolean(required=True)
    next_activity_type = String()
    next_activity_location = String()
    next_activity_voyage = String()
    updated_at = DateTime(required=True)


@shipping.event(part_of="Cargo")
class CargoMisdirected:
    """The cargo's handling history stopped matching its itinerary."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    last_known_location = String()
    detected_at = DateTime(required=True)


@shipping.event(part_of="Cargo")
class CargoUnloadedAtDestination:
    """The cargo was unloaded at its final destination and awaits claim."""

    __version__ = 1

    tracking_id = Identifier(required=True)
    destination = String(required=True)
    unloaded_at = DateTime(required=True)
