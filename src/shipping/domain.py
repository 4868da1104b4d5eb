"""Shipping bounded context: Cargo Booking, Routing and Handling.

Tracks booked cargo through a multi-leg itinerary and derives its delivery
state (routing, transport progress, misdirection, next expected activity)
from the append-only history of handling events registered in ports.
"""

from protean.domain import Domain

from shipping.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
shipping = Domain(name="shipping")
