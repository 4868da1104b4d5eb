"""Cargo routing: assigning itineraries and rerouting.

Itineraries travel inside commands as a JSON list of leg dicts:

    [{"voyage_number": "V100", "load_location": "CNHKG", "unload_location": "USNYC",
      "load_time": "2009-03-03T00:00:00+00:00", "unload_time": "2009-03-09T00:00:00+00:00"}, ...]
"""

import json

from protean import handle
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.cargo.itinerary import Itinerary, Leg, RouteSpecification
from shipping.cargo.locking import holding_cargo_lock
from shipping.domain import shipping
from shipping.handling.handling_event import HandlingEvent
from shipping.utils.clock import as_utc


def itinerary_to_json(itinerary: Itinerary) -> str:
    return json.dumps(
        [
            {
                "voyage_number": leg.voyage_number,
                "load_location": leg.load_location,
                "unload_location": leg.unload_location,
                "load_time": leg.load_time.isoformat(),
                "unload_time": leg.unload_time.isoformat(),
            }
            for leg in itinerary.legs
        ]
    )


def itinerary_from_json(legs_json: str) -> Itinerary:
    legs_data = json.loads(legs_json) if isinstance(legs_json, str) else legs_json
    return Itinerary(
        legs=[
            Leg(
                **dict(
                    leg_data,
                    load_time=as_utc(leg_data.get("load_time")),
                    unload_time=as_utc(leg_data.get("unload_time")),
                )
            )
            for leg_data in legs_data
        ]
    )


@shipping.command(part_of="Cargo")
class AssignCargoToRoute:
    """Assign an itinerary to a cargo, replacing any previous one."""

    tracking_id = Identifier(required=True)
    legs = Text(required=True)  # JSON list of leg dicts


@shipping.command(part_of="Cargo")
class SpecifyNewRoute:
    """Replace the route specification of a cargo."""

    tracking_id = Identifier(required=True)
    origin = String(required=True, max_length=5)
    destination = String(required=True, max_length=5)
    arrival_deadline = DateTime(required=True)


@shipping.command_handler(part_of=Cargo)
class RoutingHandler:
    @holding_cargo_lock
    @handle(AssignCargoToRoute)
    def assign_cargo_to_route(self, command):
        repo = current_domain.repository_for(Cargo)
        cargo = repo.get(command.tracking_id)
        history = current_domain.repository_for(HandlingEvent).lookup_handling_history_of_cargo(cargo.tracking_id)
        cargo.assign_to_route(itinerary_from_json(command.legs), history)
        repo.add(cargo)

    @holding_cargo_lock
    @handle(SpecifyNewRoute)
    def specify_new_route(self, command):
        repo = current_domain.repository_for(Cargo)
        cargo = repo.get(command.tracking_id)
        history = current_domain.repository_for(HandlingEvent).lookup_handling_history_of_cargo(cargo.tracking_id)
        cargo.specify_new_route(
            RouteSpecification(
                origin=command.origin,
                destination=command.destination,
                arrival_deadline=as_utc(command.arrival_deadline),
            ),
            history,
        )
        repo.add(cargo)
