"""Handling domain events: facts about cargo handled in port."""

from protean.fields import DateTime, Identifier, String

from shipping.domain import shipping


@shipping.event(part_of="HandlingEvent")
class HandlingEventRegistered:
    """A handling report passed validation and was appended to the cargo's history."""

    __version__ = 1

    handling_event_id = Identifier(required=True)
    tracking_id = Identifier(required=True)
    event_type = String(required=True)
    location = String(required=True)
    voyage_number = String()
    completion_time = DateTime(required=True)
    registration_time = DateTime(required=True)
