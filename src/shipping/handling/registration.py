"""Handling event registration: command and handler.

A handling report names the cargo, the port, the voyage (for loads and
unloads), the kind of handling and when it was completed. Valid reports are
appended to the cargo's handling history; the HandlingEventRegistered event
then prompts cargo inspection.
"""

import structlog
from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from shipping.cargo.locking import holding_cargo_lock
from shipping.domain import shipping
from shipping.handling.factory import HandlingEventFactory
from shipping.handling.handling_event import HandlingEvent, HandlingEventType

logger = structlog.get_logger(__name__)


@shipping.command(part_of="HandlingEvent")
class RegisterHandlingEvent:
    """Register a handling report for a cargo."""

    completion_time = DateTime(required=True)
    tracking_id = Identifier(required=True)
    voyage_number = String(max_length=20)
    unlocode = String(required=True, max_length=5)
    event_type = String(required=True, choices=HandlingEventType)


@shipping.command_handler(part_of=HandlingEvent)
class RegistrationHandler:
    @holding_cargo_lock
    @handle(RegisterHandlingEvent)
    def register_handling_event(self, command):
        event = HandlingEventFactory().create_handling_event(
            completion_time=command.completion_time,
            tracking_id=command.tracking_id,
            voyage_number=command.voyage_number,
            unlocode=command.unlocode,
            event_type=command.event_type,
        )
        current_domain.repository_for(HandlingEvent).add(event)

        logger.info(
            "Registered handling event",
            tracking_id=command.tracking_id,
            event_type=command.event_type,
            location=command.unlocode,
            voyage_number=command.voyage_number,
        )
        return str(event.id)
