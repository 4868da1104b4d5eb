"""Handling event factory: turns a handling report into a valid HandlingEvent.

Checks, in order, stopping at the first failure:

    1. the cargo exists
    2. the location exists
    3. Load/Unload: a voyage number is given and the voyage exists
    4. Receive/Customs/Claim: no voyage number is given

The factory checks structure only. An event that makes no sense for the
cargo's itinerary is still created; it shows up as misdirection later.
"""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from shipping.cargo.cargo import Cargo
from shipping.handling.handling_event import HandlingEvent, HandlingEventType
from shipping.location.location import Location
from shipping.utils.clock import as_utc
from shipping.voyage.voyage import Voyage


class HandlingEventFactory:
    """Creates handling events after validating them against reference data.

    The lookups only need ``exists(identifier) -> bool``. They default to the
    domain's repositories.
    """

    def __init__(self, cargos=None, locations=None, voyages=None):
        self.cargos = cargos or current_domain.repository_for(Cargo)
        self.locations = locations or current_domain.repository_for(Location)
        self.voyages = voyages or current_domain.repository_for(Voyage)

    def create_handling_event(
        self,
        completion_time: datetime,
        tracking_id: str,
        voyage_number: str | None,
        unlocode: str,
        event_type: str,
    ) -> HandlingEvent:
        if not self.cargos.exists(tracking_id):
            raise ValidationError({"tracking_id": [f"No cargo with tracking id {tracking_id} exists"]})

        if not self.locations.exists(unlocode):
            raise ValidationError({"unlocode": [f"Unknown location {unlocode}"]})

        try:
            handling_type = HandlingEventType(event_type)
        except ValueError:
            raise ValidationError({"event_type": [f"Unknown handling event type {event_type!r}"]}) from None

        if handling_type.requires_voyage:
            if not voyage_number:
                raise ValidationError({"voyage_number": [f"{handling_type.value} events require a voyage"]})
            if not self.voyages.exists(voyage_number):
                raise ValidationError({"voyage_number": [f"Unknown voyage {voyage_number}"]})
        elif voyage_number:
            raise ValidationError({"voyage_number": [f"{handling_type.value} events cannot have a voyage"]})

        return HandlingEvent.register(
            tracking_id=tracking_id,
            event_type=handling_type.value,
            location=unlocode,
            voyage_number=voyage_number or None,
            completion_time=as_utc(completion_time),
        )
