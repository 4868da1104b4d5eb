"""Repository for the HandlingEvent aggregate."""

from shipping.domain import shipping
from shipping.handling.handling_event import HandlingEvent, HandlingHistory


@shipping.repository(part_of=HandlingEvent)
class HandlingEventRepository:
    def lookup_handling_history_of_cargo(self, tracking_id: str) -> HandlingHistory:
        """All handling events registered for a cargo, in canonical order."""
        results = self._dao.query.filter(tracking_id=tracking_id).all()
        return HandlingHistory(results.items)
