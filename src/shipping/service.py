"""Application entry points for the shipping domain.

Thin functions over ``current_domain.process`` for callers that do not speak
commands: scripts, the management CLI and the scenario tests. Every function
that mutates a cargo holds that cargo's lock for the whole command.
"""

from contextlib import contextmanager
from datetime import datetime

import structlog
from protean.utils.globals import current_domain

from shipping.cargo.booking import BookNewCargo
from shipping.cargo.cargo import Cargo
from shipping.cargo.delivery import derive_delivery
from shipping.cargo.inspection import inspect_cargo
from shipping.cargo.itinerary import Itinerary
from shipping.cargo.locking import cargo_lock
from shipping.cargo.routing import AssignCargoToRoute, SpecifyNewRoute, itinerary_to_json
from shipping.handling.handling_event import HandlingEvent
from shipping.handling.registration import RegisterHandlingEvent
from shipping.routing import get_router
from shipping.utils.logging import add_context, clear_context

__all__ = [
    "assign_cargo_to_route",
    "book_new_cargo",
    "change_destination",
    "derive_delivery",
    "find_cargo",
    "register_handling_event",
    "request_possible_routes_for_cargo",
    "specify_new_route",
]

logger = structlog.get_logger(__name__)


@contextmanager
def _cargo_operation(tracking_id: str, operation: str):
    with cargo_lock(tracking_id):
        add_context(tracking_id=str(tracking_id), operation=operation)
        try:
            yield
        finally:
            clear_context()


def find_cargo(tracking_id: str) -> Cargo | None:
    return current_domain.repository_for(Cargo).find(tracking_id)


def book_new_cargo(origin: str, destination: str, arrival_deadline: datetime) -> str:
    """Book a new cargo and return its tracking id."""
    return current_domain.process(
        BookNewCargo(origin=origin, destination=destination, arrival_deadline=arrival_deadline),
        asynchronous=False,
    )


def request_possible_routes_for_cargo(tracking_id: str) -> list[Itinerary]:
    """Ask the routing service for itineraries fitting the cargo's route specification.

    Unknown cargos have no routes.
    """
    cargo = find_cargo(tracking_id)
    if cargo is None:
        logger.info("Route request for unknown cargo", tracking_id=tracking_id)
        return []

    itineraries = get_router().fetch_routes_for_specification(cargo.route_specification)
    logger.debug("Fetched candidate routes", tracking_id=tracking_id, candidates=len(itineraries))
    return itineraries


def assign_cargo_to_route(tracking_id: str, itinerary: Itinerary) -> Cargo:
    with _cargo_operation(tracking_id, "assign_cargo_to_route"):
        current_domain.process(
            AssignCargoToRoute(tracking_id=tracking_id, legs=itinerary_to_json(itinerary)),
            asynchronous=False,
        )
        logger.info("Assigned cargo to route", legs=len(itinerary.legs))
        return find_cargo(tracking_id)


def _process_route_change(tracking_id: str, origin: str, destination: str, arrival_deadline: datetime) -> Cargo:
    current_domain.process(
        SpecifyNewRoute(
            tracking_id=tracking_id,
            origin=origin,
            destination=destination,
            arrival_deadline=arrival_deadline,
        ),
        asynchronous=False,
    )
    logger.info("Specified new route", origin=origin, destination=destination)
    return find_cargo(tracking_id)


def specify_new_route(tracking_id: str, origin: str, destination: str, arrival_deadline: datetime) -> Cargo:
    with _cargo_operation(tracking_id, "specify_new_route"):
        return _process_route_change(tracking_id, origin, destination, arrival_deadline)


def change_destination(tracking_id: str, destination: str) -> Cargo:
    """Reroute the cargo to a new destination, keeping origin and deadline.

    The current route specification is read under the cargo's lock.
    """
    with _cargo_operation(tracking_id, "change_destination"):
        route_specification = current_domain.repository_for(Cargo).get(tracking_id).route_specification
        return _process_route_change(
            tracking_id,
            route_specification.origin,
            destination,
            route_specification.arrival_deadline,
        )


def register_handling_event(
    completion_time: datetime,
    tracking_id: str,
    voyage_number: str | None,
    unlocode: str,
    event_type: str,
) -> HandlingEvent:
    """Register a handling report and bring the cargo's delivery up to date.

    Invalid reports raise ``ValidationError`` and leave both the handling
    history and the cargo untouched.
    """
    with _cargo_operation(tracking_id, "register_handling_event"):
        event_id = current_domain.process(
            RegisterHandlingEvent(
                completion_time=completion_time,
                tracking_id=tracking_id,
                voyage_number=voyage_number,
                unlocode=unlocode,
                event_type=event_type,
            ),
            asynchronous=False,
        )
        # Inspection is idempotent; run it here so the caller sees the new delivery
        inspect_cargo(tracking_id)
        return current_domain.repository_for(HandlingEvent).get(event_id)
