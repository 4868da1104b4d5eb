"""Cargo aggregate (CQRS): the core of the shipping domain.

A Cargo is booked with a RouteSpecification and no itinerary. It changes in
exactly three ways, and every one of them re-derives the Delivery snapshot
from scratch using the complete handling history:

    assign_to_route(itinerary, history)        → new plan
    specify_new_route(route_spec, history)     → rerouting
    derive_delivery_progress(history)          → a handling event was registered

The aggregate does not own handling events; callers hand it the current
HandlingHistory for the cargo.
"""

from datetime import UTC, datetime
from uuid import uuid4

from protean.fields import DateTime, Identifier, ValueObject

from shipping.cargo.delivery import Delivery, derive_delivery
from shipping.cargo.events import (
    CargoAssignedToRoute,
    CargoBooked,
    CargoMisdirected,
    CargoRouteSpecified,
    CargoUnloadedAtDestination,
    DeliveryProgressUpdated,
)
from shipping.cargo.itinerary import Itinerary, RouteSpecification
from shipping.domain import shipping
from shipping.handling.handling_event import HandlingHistory


def next_tracking_id() -> str:
    """Generate a fresh tracking id, e.g. ``"3F2A9C1B"``."""
    return uuid4().hex[:8].upper()


@shipping.aggregate
class Cargo:
    tracking_id = Identifier(identifier=True, required=True)
    route_specification = ValueObject(RouteSpecification, required=True)
    itinerary = ValueObject(Itinerary)
    delivery = ValueObject(Delivery)
    booked_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def book(cls, tracking_id: str, route_specification: RouteSpecification):
        """Book a new cargo. It starts unrouted and not received."""
        now = datetime.now(UTC)
        cargo = cls(
            tracking_id=tracking_id,
            route_specification=route_specification,
            delivery=derive_delivery(route_specification, None, HandlingHistory.EMPTY),
            booked_at=now,
            updated_at=now,
        )
        cargo.raise_(
            CargoBooked(
                tracking_id=tracking_id,
                origin=route_specification.origin,
                destination=route_specification.destination,
                arrival_deadline=route_specification.arrival_deadline,
                booked_at=now,
            )
        )
        cargo._announce_delivery(now)
        return cargo

    # -------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------
    def assign_to_route(self, itinerary: Itinerary, history: HandlingHistory) -> None:
        """Attach a new itinerary, replacing any previous one."""
        now = datetime.now(UTC)
        self.itinerary = itinerary
        self.raise_(
            CargoAssignedToRoute(
                tracking_id=self.tracking_id,
                leg_count=len(itinerary.legs),
                initial_departure_location=itinerary.initial_departure_location,
                final_arrival_location=itinerary.final_arrival_location,
                final_arrival_date=itinerary.final_arrival_date,
                assigned_at=now,
            )
        )
        self._rederive(history, now)

    def specify_new_route(self, route_specification: RouteSpecification, history: HandlingHistory) -> None:
        """Replace the route specification. The itinerary is kept and re-judged."""
        now = datetime.now(UTC)
        self.route_specification = route_specification
        self.raise_(
            CargoRouteSpecified(
                tracking_id=self.tracking_id,
                origin=route_specification.origin,
                destination=route_specification.destination,
                arrival_deadline=route_specification.arrival_deadline,
                specified_at=now,
            )
        )
        self._rederive(history, now)

    # -------------------------------------------------------------------
    # Handling
    # -------------------------------------------------------------------
    def derive_delivery_progress(self, history: HandlingHistory) -> None:
        """Re-derive the delivery after the handling history changed."""
        self._rederive(history, datetime.now(UTC))

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _rederive(self, history: HandlingHistory, now: datetime) -> None:
        previous = self.delivery
        self.delivery = derive_delivery(self.route_specification, self.itinerary, history)
        self.updated_at = now

        if self.delivery.is_misdirected and not (previous and previous.is_misdirected):
            self.raise_(
                CargoMisdirected(
                    tracking_id=self.tracking_id,
                    last_known_location=self.delivery.last_known_location,
                    detected_at=now,
                )
            )
        if self.delivery.is_unloaded_at_destination and not (previous and previous.is_unloaded_at_destination):
            self.raise_(
                CargoUnloadedAtDestination(
                    tracking_id=self.tracking_id,
                    destination=self.route_specification.destination,
                    unloaded_at=now,
                )
            )
        self._announce_delivery(now)

    def _announce_delivery(self, now: datetime) -> None:
        delivery = self.delivery
        self.raise_(
            DeliveryProgressUpdated(
                tracking_id=self.tracking_id,
                transport_status=delivery.transport_status,
                routing_status=delivery.routing_status,
                last_known_location=delivery.last_known_location,
                current_voyage=delivery.current_voyage,
                is_misdirected=delivery.is_misdirected,
                eta=delivery.eta,
                is_unloaded_at_destination=delivery.is_unloaded_at_destination,
                next_activity_type=delivery.next_activity_type,
                next_activity_location=delivery.next_activity_location,
                next_activity_voyage=delivery.next_activity_voyage,
                updated_at=now,
            )
        )
