"""Repository for the Cargo aggregate."""

from shipping.cargo.cargo import Cargo
from shipping.domain import shipping


@shipping.repository(part_of=Cargo)
class CargoRepository:
    def find(self, tracking_id: str) -> Cargo | None:
        """Find a cargo by tracking id, or ``None`` when it is unknown."""
        if not tracking_id:
            return None
        return self._dao.query.filter(tracking_id=tracking_id).all().first

    def exists(self, tracking_id: str) -> bool:
        return self.find(tracking_id) is not None

    def find_all(self) -> list[Cargo]:
        return self._dao.query.all().items
