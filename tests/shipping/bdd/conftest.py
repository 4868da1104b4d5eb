"""Shared BDD fixtures and step definitions for cargo tracking."""

from datetime import UTC, datetime

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from shipping import service
from shipping.cargo.itinerary import Itinerary, Leg
from shipping.sample_data import SAMPLE_VOYAGES, seed_reference_data


def _at(day):
    return datetime.fromisoformat(day).replace(tzinfo=UTC)


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


def _handle(error, tracking_id, day, voyage, location, event_type):
    try:
        service.register_handling_event(_at(day), tracking_id, voyage, location, event_type)
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the sample ports and voyages")
def sample_reference_data():
    seed_reference_data()


@given(
    parsers.cfparse('a cargo booked from "{origin}" to "{destination}" by "{deadline}"'),
    target_fixture="tracking_id",
)
def booked_cargo(origin, destination, deadline):
    return service.book_new_cargo(origin, destination, _at(deadline))


@given(parsers.cfparse('the cargo is routed on voyage "{voyage}" from "{origin}" to "{destination}"'))
def routed_cargo(tracking_id, voyage, origin, destination):
    movements = SAMPLE_VOYAGES[voyage]
    boarding = next(m for m in movements if m["departure_location"] == origin)
    leaving = next(m for m in movements if m["arrival_location"] == destination)
    leg = Leg(
        voyage_number=voyage,
        load_location=origin,
        unload_location=destination,
        load_time=boarding["departure_time"],
        unload_time=leaving["arrival_time"],
    )
    service.assign_cargo_to_route(tracking_id, Itinerary(legs=[leg]))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse('a cargo is booked from "{origin}" to "{destination}" by "{deadline}"'),
    target_fixture="tracking_id",
)
def book_cargo(origin, destination, deadline):
    return service.book_new_cargo(origin, destination, _at(deadline))


@when(parsers.cfparse('the cargo is received in "{location}" on "{day}"'))
def receive(error, tracking_id, location, day):
    _handle(error, tracking_id, day, None, location, "Receive")


@when(parsers.cfparse('the cargo is loaded onto voyage "{voyage}" in "{location}" on "{day}"'))
def load(error, tracking_id, voyage, location, day):
    _handle(error, tracking_id, day, voyage, location, "Load")


@when(parsers.cfparse('the cargo is unloaded from voyage "{voyage}" in "{location}" on "{day}"'))
def unload(error, tracking_id, voyage, location, day):
    _handle(error, tracking_id, day, voyage, location, "Unload")


@when(parsers.cfparse('the cargo is claimed in "{location}" on "{day}"'))
def claim(error, tracking_id, location, day):
    _handle(error, tracking_id, day, None, location, "Claim")


@when(parsers.cfparse('the destination is changed to "{destination}"'))
def change_destination(tracking_id, destination):
    service.change_destination(tracking_id, destination)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
def _delivery(tracking_id):
    return service.find_cargo(tracking_id).delivery


@then(parsers.cfparse('the transport status is "{status}"'))
def transport_status_is(tracking_id, status):
    assert _delivery(tracking_id).transport_status == status


@then(parsers.cfparse('the routing status is "{status}"'))
def routing_status_is(tracking_id, status):
    assert _delivery(tracking_id).routing_status == status


@then(parsers.cfparse('the current voyage is "{voyage}"'))
def current_voyage_is(tracking_id, voyage):
    assert _delivery(tracking_id).current_voyage == voyage


@then(parsers.cfparse('the last known location is "{location}"'))
def last_known_location_is(tracking_id, location):
    assert _delivery(tracking_id).last_known_location == location


@then(parsers.cfparse('the next expected activity is "{event_type}" in "{location}" on voyage "{voyage}"'))
def next_activity_on_voyage(tracking_id, event_type, location, voyage):
    activity = _delivery(tracking_id).next_expected_activity
    assert (activity.event_type, activity.location, activity.voyage_number) == (event_type, location, voyage)


@then(parsers.re(r'the next expected activity is "(?P<event_type>\w+)" in "(?P<location>\w+)"$'))
def next_activity(tracking_id, event_type, location):
    activity = _delivery(tracking_id).next_expected_activity
    assert (activity.event_type, activity.location, activity.voyage_number) == (event_type, location, None)


@then("no activity is expected")
def no_activity_expected(tracking_id):
    assert _delivery(tracking_id).next_expected_activity is None


@then("no arrival is estimated")
def no_eta(tracking_id):
    assert _delivery(tracking_id).eta is None


@then("the cargo is misdirected")
def is_misdirected(tracking_id):
    assert _delivery(tracking_id).is_misdirected is True


@then("the cargo is unloaded at its destination")
def is_unloaded_at_destination(tracking_id):
    assert _delivery(tracking_id).is_unloaded_at_destination is True


@then(parsers.cfparse('the report is rejected for "{field_name}"'))
def report_rejected(error, field_name):
    assert error["exc"] is not None
    assert field_name in error["exc"].messages
