"""Repository for the Voyage aggregate."""

from shipping.domain import shipping
from shipping.voyage.voyage import Voyage


@shipping.repository(part_of=Voyage)
class VoyageRepository:
    def find(self, voyage_number: str) -> Voyage | None:
        """Find a voyage by number, or ``None`` when it is unknown."""
        if not voyage_number:
            return None
        return self._dao.query.filter(voyage_number=voyage_number).all().first

    def exists(self, voyage_number: str) -> bool:
        return self.find(voyage_number) is not None

    def find_all(self) -> list[Voyage]:
        return self._dao.query.all().items
