"""Cargo inspection: re-derives delivery progress after handling.

Reacts to HandlingEventRegistered from the handling stream. The cargo is
loaded together with its complete handling history and its delivery is
derived again from scratch.
"""

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from shipping.cargo.cargo import Cargo
from shipping.cargo.locking import cargo_lock
from shipping.domain import shipping
from shipping.handling.events import HandlingEventRegistered
from shipping.handling.handling_event import HandlingEvent

logger = structlog.get_logger(__name__)


def inspect_cargo(tracking_id: str) -> Cargo | None:
    """Bring the cargo's delivery up to date with its handling history."""
    with cargo_lock(tracking_id):
        repo = current_domain.repository_for(Cargo)
        cargo = repo.find(tracking_id)
        if cargo is None:
            logger.warning("Cannot inspect unknown cargo", tracking_id=tracking_id)
            return None

        history = current_domain.repository_for(HandlingEvent).lookup_handling_history_of_cargo(tracking_id)
        cargo.derive_delivery_progress(history)
        repo.add(cargo)

    logger.debug(
        "Inspected cargo",
        tracking_id=tracking_id,
        transport_status=cargo.delivery.transport_status,
        is_misdirected=cargo.delivery.is_misdirected,
    )
    return cargo


@shipping.event_handler(part_of=Cargo, stream_category="shipping::handling_event")
class CargoInspectionHandler:
    """Keeps each cargo's delivery in step with newly registered handling events."""

    @handle(HandlingEventRegistered)
    def on_handling_event_registered(self, event: HandlingEventRegistered) -> None:
        inspect_cargo(str(event.tracking_id))
