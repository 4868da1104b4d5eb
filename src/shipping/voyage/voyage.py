"""Voyage aggregate: a scheduled journey of a carrier between ports.

A voyage is an ordered chain of carrier movements, each departing from the
location where the previous one arrived. Voyages are reference data for the
handling and routing workflows; cargo legs refer to them by voyage number.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String

from shipping.domain import shipping


@shipping.entity(part_of="Voyage")
class CarrierMovement:
    """One hop of a voyage between two ports."""

    sequence = Integer(required=True, min_value=0)
    departure_location = String(required=True, max_length=5)
    arrival_location = String(required=True, max_length=5)
    departure_time = DateTime(required=True)
    arrival_time = DateTime(required=True)

    @invariant.post
    def arrival_must_follow_departure(self):
        if self.departure_time and self.arrival_time and self.arrival_time < self.departure_time:
            raise ValidationError({"arrival_time": ["Arrival cannot precede departure"]})

    @invariant.post
    def must_move_between_different_locations(self):
        if self.departure_location and self.departure_location == self.arrival_location:
            raise ValidationError({"arrival_location": ["A carrier movement must change location"]})


@shipping.aggregate
class Voyage:
    voyage_number = String(identifier=True, required=True, max_length=20)
    movements = HasMany(CarrierMovement)

    @invariant.post
    def schedule_must_be_continuous(self):
        schedule = self.schedule
        for previous, current in zip(schedule, schedule[1:]):
            if previous.arrival_location != current.departure_location:
                raise ValidationError(
                    {
                        "movements": [
                            f"Movement {current.sequence} departs from {current.departure_location} "
                            f"but the voyage arrived at {previous.arrival_location}"
                        ]
                    }
                )

    @classmethod
    def schedule_voyage(cls, voyage_number: str, movements_data: list[dict]) -> "Voyage":
        """Create a voyage from an ordered list of movement dicts."""
        if not movements_data:
            raise ValidationError({"movements": ["A voyage needs at least one carrier movement"]})

        voyage = cls(voyage_number=voyage_number)
        for sequence, movement_data in enumerate(movements_data):
            voyage.add_movements(CarrierMovement(sequence=sequence, **movement_data))
        return voyage

    @property
    def schedule(self) -> list[CarrierMovement]:
        """Carrier movements in sailing order."""
        return sorted(self.movements or [], key=lambda movement: movement.sequence)

    @property
    def departure_location(self) -> str | None:
        schedule = self.schedule
        return schedule[0].departure_location if schedule else None

    @property
    def arrival_location(self) -> str | None:
        schedule = self.schedule
        return schedule[-1].arrival_location if schedule else None

    def calls_at(self, unlocode: str) -> bool:
        """True if the voyage departs from or arrives at the given port."""
        return any(unlocode in (m.departure_location, m.arrival_location) for m in self.schedule)
