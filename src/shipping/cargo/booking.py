"""Cargo booking: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, String
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo, next_tracking_id
from shipping.cargo.itinerary import RouteSpecification
from shipping.domain import shipping
from shipping.location.location import Location
from shipping.utils.clock import as_utc

logger = structlog.get_logger(__name__)


@shipping.command(part_of="Cargo")
class BookNewCargo:
    """Book a cargo from origin to destination, to arrive before the deadline."""

    origin = String(required=True, max_length=5)
    destination = String(required=True, max_length=5)
    arrival_deadline = DateTime(required=True)


@shipping.command_handler(part_of=Cargo)
class BookingHandler:
    @handle(BookNewCargo)
    def book_new_cargo(self, command):
        locations = current_domain.repository_for(Location)
        for field_name in ("origin", "destination"):
            unlocode = getattr(command, field_name)
            if not locations.exists(unlocode):
                raise ValidationError({field_name: [f"Unknown location {unlocode}"]})

        route_specification = RouteSpecification(
            origin=command.origin,
            destination=command.destination,
            arrival_deadline=as_utc(command.arrival_deadline),
        )
        cargo = Cargo.book(next_tracking_id(), route_specification)
        current_domain.repository_for(Cargo).add(cargo)

        logger.info(
            "Booked new cargo",
            tracking_id=cargo.tracking_id,
            origin=command.origin,
            destination=command.destination,
        )
        return cargo.tracking_id
