"""Alert relay: passes noteworthy cargo events on to operators.

The relay is the hook for an outbound notification channel. It logs each
alert with the tracking id as structured context.
"""

import structlog
from protean.utils.mixins import handle

from shipping.cargo.cargo import Cargo
from shipping.cargo.events import CargoMisdirected, CargoUnloadedAtDestination
from shipping.domain import shipping

logger = structlog.get_logger(__name__)


@shipping.event_handler(part_of=Cargo)
class CargoAlertHandler:
    @handle(CargoMisdirected)
    def on_cargo_misdirected(self, event: CargoMisdirected) -> None:
        logger.warning(
            "Cargo misdirected",
            tracking_id=str(event.tracking_id),
            last_known_location=event.last_known_location,
        )

    @handle(CargoUnloadedAtDestination)
    def on_cargo_unloaded_at_destination(self, event: CargoUnloadedAtDestination) -> None:
        logger.info(
            "Cargo unloaded at destination",
            tracking_id=str(event.tracking_id),
            destination=event.destination,
        )
