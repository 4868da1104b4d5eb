"""Route finding for cargo booking.

The application talks to one ``RoutingPort`` at a time. Which adapter backs it
is chosen by name from the ``ROUTING_ADAPTER`` environment variable the first
time a router is needed; tests and scripts may install their own with
``set_router``.
"""

import os

import structlog

from shipping.routing.port import RoutingPort

logger = structlog.get_logger(__name__)


def _fake_router() -> RoutingPort:
    from shipping.routing.fake_adapter import FakeRouter

    return FakeRouter()


_ADAPTER_FACTORIES = {
    "fake": _fake_router,
}

_active_router: RoutingPort | None = None


def get_router() -> RoutingPort:
    """The active routing adapter, built from ``ROUTING_ADAPTER`` on first use."""
    global _active_router
    if _active_router is None:
        name = os.environ.get("ROUTING_ADAPTER", "fake")
        factory = _ADAPTER_FACTORIES.get(name)
        if factory is None:
            known = ", ".join(sorted(_ADAPTER_FACTORIES))
            raise ValueError(f"Unknown routing adapter {name!r}; expected one of: {known}")
        _active_router = factory()
        logger.debug("Routing adapter ready", adapter=name)
    return _active_router


def set_router(router: RoutingPort | None = None) -> None:
    """Install ``router`` as the active adapter. ``None`` rebuilds from the environment on next use."""
    global _active_router
    _active_router = router
