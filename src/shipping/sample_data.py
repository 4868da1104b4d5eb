"""Sample reference data: ports and voyage schedules.

Used to seed development databases and by the fake routing adapter. Times
are UTC.
"""

from datetime import UTC, datetime

import structlog
from protean.utils.globals import current_domain

from shipping.location.location import Location
from shipping.voyage.voyage import Voyage

logger = structlog.get_logger(__name__)

HONGKONG = "CNHKG"
MELBOURNE = "AUMEL"
STOCKHOLM = "SESTO"
HELSINKI = "FIHEL"
CHICAGO = "USCHI"
TOKYO = "JNTKO"
HAMBURG = "DEHAM"
SHANGHAI = "CNSHA"
ROTTERDAM = "NLRTM"
GOTHENBURG = "SEGOT"
HANGZHOU = "CNHGH"
NEWYORK = "USNYC"
DALLAS = "USDAL"

SAMPLE_LOCATIONS = {
    HONGKONG: "Hongkong",
    MELBOURNE: "Melbourne",
    STOCKHOLM: "Stockholm",
    HELSINKI: "Helsinki",
    CHICAGO: "Chicago",
    TOKYO: "Tokyo",
    HAMBURG: "Hamburg",
    SHANGHAI: "Shanghai",
    ROTTERDAM: "Rotterdam",
    GOTHENBURG: "Göteborg",
    HANGZHOU: "Hangzhou",
    NEWYORK: "New York",
    DALLAS: "Dallas",
}


def _at(day: str) -> datetime:
    return datetime.fromisoformat(day).replace(tzinfo=UTC)


def _movement(departure_location, arrival_location, departure_time, arrival_time):
    return {
        "departure_location": departure_location,
        "arrival_location": arrival_location,
        "departure_time": _at(departure_time),
        "arrival_time": _at(arrival_time),
    }


SAMPLE_VOYAGES = {
    "V100": [
        _movement(HONGKONG, TOKYO, "2009-03-03", "2009-03-05"),
        _movement(TOKYO, NEWYORK, "2009-03-06", "2009-03-09"),
    ],
    "V200": [
        _movement(TOKYO, NEWYORK, "2009-03-06", "2009-03-08"),
        _movement(NEWYORK, CHICAGO, "2009-03-10", "2009-03-14"),
        _movement(CHICAGO, STOCKHOLM, "2009-03-14", "2009-03-16"),
    ],
    "V300": [
        _movement(TOKYO, ROTTERDAM, "2009-03-08", "2009-03-11"),
        _movement(ROTTERDAM, HAMBURG, "2009-03-11", "2009-03-12"),
        _movement(HAMBURG, MELBOURNE, "2009-03-14", "2009-03-18"),
        _movement(MELBOURNE, TOKYO, "2009-03-19", "2009-03-21"),
    ],
    "V400": [
        _movement(HAMBURG, STOCKHOLM, "2009-03-14", "2009-03-15"),
        _movement(STOCKHOLM, HELSINKI, "2009-03-15", "2009-03-16"),
        _movement(HELSINKI, HAMBURG, "2009-03-20", "2009-03-22"),
    ],
}


def seed_reference_data() -> None:
    """Store the sample locations and voyages, skipping any already present."""
    locations = current_domain.repository_for(Location)
    for unlocode, name in SAMPLE_LOCATIONS.items():
        if not locations.exists(unlocode):
            locations.add(Location(unlocode=unlocode, name=name))

    voyages = current_domain.repository_for(Voyage)
    for voyage_number, movements in SAMPLE_VOYAGES.items():
        if not voyages.exists(voyage_number):
            voyages.add(Voyage.schedule_voyage(voyage_number, movements))

    logger.info(
        "Seeded reference data",
        locations=len(SAMPLE_LOCATIONS),
        voyages=len(SAMPLE_VOYAGES),
    )
