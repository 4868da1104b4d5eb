"""Cargo tracking: the customer-facing view of where a cargo is and what comes next."""

from protean.core.projector import on
from protean.fields import Boolean, DateTime, Identifier, String
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.cargo.events import CargoBooked, CargoRouteSpecified, DeliveryProgressUpdated
from shipping.domain import shipping


@shipping.projection
class CargoTrackingView:
    tracking_id = Identifier(identifier=True, required=True)
    origin = String(required=True)
    destination = String(required=True)
    arrival_deadline = DateTime()
    transport_status = String()
    routing_status = String()
    last_known_location = String()
    current_voyage = String()
    is_misdirected = Boolean(default=False)
    is_unloaded_at_destination = Boolean(default=False)
    eta = DateTime()
    next_activity_type = String()
    next_activity_location = String()
    next_activity_voyage = String()
    booked_at = DateTime()
    updated_at = DateTime()

    @property
    def status_text(self) -> str:
        """One line summary, e.g. "In port CNHKG" or "Onboard voyage V100"."""
        if self.transport_status == "Onboard_Carrier":
            return f"Onboard voyage {self.current_voyage}"
        if self.transport_status == "In_Port":
            return f"In port {self.last_known_location}"
        if self.transport_status == "Claimed":
            return f"Claimed at {self.last_known_location}"
        return "Not received"


@shipping.projector(projector_for=CargoTrackingView, aggregates=[Cargo])
class CargoTrackingProjector:
    @on(CargoBooked)
    def on_cargo_booked(self, event):
        current_domain.repository_for(CargoTrackingView).add(
            CargoTrackingView(
                tracking_id=event.tracking_id,
                origin=event.origin,
                destination=event.destination,
                arrival_deadline=event.arrival_deadline,
                booked_at=event.booked_at,
                updated_at=event.booked_at,
            )
        )

    @on(CargoRouteSpecified)
    def on_cargo_route_specified(self, event):
        repo = current_domain.repository_for(CargoTrackingView)
        view = repo.get(event.tracking_id)
        view.origin = event.origin
        view.destination = event.destination
        view.arrival_deadline = event.arrival_deadline
        view.updated_at = event.specified_at
        repo.add(view)

    @on(DeliveryProgressUpdated)
    def on_delivery_progress_updated(self, event):
        repo = current_domain.repository_for(CargoTrackingView)
        view = repo.get(event.tracking_id)
        view.transport_status = event.transport_status
        view.routing_status = event.routing_status
        view.last_known_location = event.last_known_location
        view.current_voyage = event.current_voyage
        view.is_misdirected = event.is_misdirected
        view.is_unloaded_at_destination = event.is_unloaded_at_destination
        view.eta = event.eta
        view.next_activity_type = event.next_activity_type
        view.next_activity_location = event.next_activity_location
        view.next_activity_voyage = event.next_activity_voyage
        view.updated_at = event.updated_at
        repo.add(view)
