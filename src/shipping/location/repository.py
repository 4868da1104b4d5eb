"""Repository for the Location aggregate."""

from shipping.domain import shipping
from shipping.location.location import Location


@shipping.repository(part_of=Location)
class LocationRepository:
    def find(self, unlocode: str) -> Location | None:
        """Find a location by UN/LOCODE, or ``None`` when it is unknown."""
        if not unlocode:
            return None
        return self._dao.query.filter(unlocode=unlocode).all().first

    def exists(self, unlocode: str) -> bool:
        return self.find(unlocode) is not None

    def find_all(self) -> list[Location]:
        return self._dao.query.all().items
