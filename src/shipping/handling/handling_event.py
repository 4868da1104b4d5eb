"""HandlingEvent aggregate: a single physical handling of a cargo.

Handling events are append-only: once registered they are never modified or
removed. A cargo's handling history is the set of all its handling events,
consumed in completion order.

Only carrier movements (load and unload) take place on a voyage:

    Receive, Customs, Claim  → voyage_number must be absent
    Load, Unload             → voyage_number is required
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String

from shipping.domain import shipping
from shipping.handling.events import HandlingEventRegistered
from shipping.utils.clock import is_naive


class HandlingEventType(Enum):
    RECEIVE = "Receive"
    LOAD = "Load"
    UNLOAD = "Unload"
    CUSTOMS = "Customs"
    CLAIM = "Claim"

    @property
    def requires_voyage(self) -> bool:
        return self in _CARRIER_MOVEMENT_TYPES


_CARRIER_MOVEMENT_TYPES = {HandlingEventType.LOAD, HandlingEventType.UNLOAD}
_EVENT_TYPE_VALUES = {event_type.value for event_type in HandlingEventType}


@shipping.aggregate
class HandlingEvent:
    tracking_id = Identifier(required=True)
    event_type = String(required=True, choices=HandlingEventType)
    location = String(required=True, max_length=5)
    voyage_number = String(max_length=20)
    completion_time = DateTime(required=True)
    registration_time = DateTime(required=True)

    @invariant.post
    def voyage_only_on_carrier_movements(self):
        if self.event_type not in _EVENT_TYPE_VALUES:
            return
        event_type = HandlingEventType(self.event_type)
        if event_type.requires_voyage and not self.voyage_number:
            raise ValidationError({"voyage_number": [f"{event_type.value} events require a voyage"]})
        if not event_type.requires_voyage and self.voyage_number:
            raise ValidationError({"voyage_number": [f"{event_type.value} events cannot have a voyage"]})

    @invariant.post
    def timestamps_must_carry_timezone(self):
        for field_name in ("completion_time", "registration_time"):
            if is_naive(getattr(self, field_name)):
                raise ValidationError({field_name: ["Handling timestamps must carry a timezone"]})

    @classmethod
    def register(
        cls,
        tracking_id: str,
        event_type: str,
        location: str,
        completion_time: datetime,
        voyage_number: str | None = None,
        registration_time: datetime | None = None,
    ):
        """Record a new handling event and announce it."""
        registration_time = registration_time or datetime.now(UTC)
        event = cls(
            tracking_id=tracking_id,
            event_type=event_type,
            location=location,
            voyage_number=voyage_number,
            completion_time=completion_time,
            registration_time=registration_time,
        )
        event.raise_(
            HandlingEventRegistered(
                handling_event_id=str(event.id),
                tracking_id=tracking_id,
                event_type=event.event_type,
                location=location,
                voyage_number=voyage_number,
                completion_time=completion_time,
                registration_time=registration_time,
            )
        )
        return event


class HandlingHistory:
    """The handling events of one cargo, in canonical order.

    Events are ordered by completion time, then registration time. Events
    that tie on both keep the order in which they were supplied.
    """

    def __init__(self, events=()):
        self._events = tuple(sorted(events, key=lambda e: (e.completion_time, e.registration_time)))

    def __iter__(self):
        return iter(self._events)

    def __len__(self):
        return len(self._events)

    @property
    def events(self) -> tuple:
        return self._events

    @property
    def most_recently_completed_event(self):
        """The last event in canonical order, or ``None`` for an empty history."""
        return self._events[-1] if self._events else None


HandlingHistory.EMPTY = HandlingHistory()
