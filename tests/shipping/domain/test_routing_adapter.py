"""Tests for the fake routing adapter."""

from datetime import UTC, datetime

import pytest

from shipping.cargo.itinerary import Itinerary, Leg, RouteSpecification, satisfies
from shipping.routing import get_router, set_router
from shipping.routing.fake_adapter import FakeRouter


def _at(day):
    return datetime.fromisoformat(day).replace(tzinfo=UTC)


def _spec(origin="CNHKG", destination="SESTO", deadline="2009-03-31"):
    return RouteSpecification(origin=origin, destination=destination, arrival_deadline=_at(deadline))


class TestGetRouter:
    def test_default_is_fake(self):
        set_router()
        assert isinstance(get_router(), FakeRouter)

    def test_singleton(self):
        set_router()
        assert get_router() is get_router()

    def test_unknown_adapter_rejected(self, monkeypatch):
        set_router()
        monkeypatch.setenv("ROUTING_ADAPTER", "teleport")
        with pytest.raises(ValueError) as exc:
            get_router()
        assert "fake" in str(exc.value)
        set_router()


class TestSetRouter:
    def test_installed_router_is_returned(self):
        router = FakeRouter(voyages={})
        set_router(router)
        assert get_router() is router

    def test_installed_router_ignores_environment(self, monkeypatch):
        router = FakeRouter(voyages={})
        set_router(router)
        monkeypatch.setenv("ROUTING_ADAPTER", "teleport")
        assert get_router() is router

    def test_none_rebuilds_from_environment(self):
        router = FakeRouter(voyages={})
        set_router(router)
        set_router(None)
        assert get_router() is not router
        assert isinstance(get_router(), FakeRouter)


class TestScheduleSearch:
    def test_finds_routes_that_satisfy_the_specification(self):
        spec = _spec()
        routes = FakeRouter().fetch_routes_for_specification(spec)
        assert routes
        assert all(satisfies(route, spec) for route in routes)

    def test_routes_sorted_by_arrival(self):
        routes = FakeRouter().fetch_routes_for_specification(_spec())
        arrivals = [route.final_arrival_date for route in routes]
        assert arrivals == sorted(arrivals)

    def test_legs_are_continuous_and_follow_transfers(self):
        for route in FakeRouter().fetch_routes_for_specification(_spec()):
            for previous, current in zip(route.legs, route.legs[1:]):
                assert previous.unload_location == current.load_location
                assert current.load_time >= previous.unload_time

    def test_tight_deadline_leaves_no_route(self):
        assert FakeRouter().fetch_routes_for_specification(_spec(deadline="2009-03-04")) == []

    def test_unserved_origin_has_no_route(self):
        assert FakeRouter().fetch_routes_for_specification(_spec(origin="USDAL")) == []


class TestConfiguredRoutes:
    def test_configured_routes_returned_as_is(self):
        itinerary = Itinerary(
            legs=[
                Leg(
                    voyage_number="V999",
                    load_location="CNHKG",
                    unload_location="SESTO",
                    load_time=_at("2009-03-01"),
                    unload_time=_at("2009-03-02"),
                )
            ]
        )
        router = FakeRouter()
        router.configure({"CNHKG": [itinerary]})
        assert router.fetch_routes_for_specification(_spec()) == [itinerary]
        assert router.fetch_routes_for_specification(_spec(origin="JNTKO")) == []

    def test_configure_none_restores_search(self):
        router = FakeRouter()
        router.configure({})
        assert router.fetch_routes_for_specification(_spec()) == []
        router.configure(None)
        assert router.fetch_routes_for_specification(_spec())
