import pytest
from protean.integrations.pytest import DomainFixture

from shipping.sample_data import seed_reference_data


@pytest.fixture(scope="session")
def shipping_bed():
    from shipping.domain import shipping

    bed = DomainFixture(shipping)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shipping_bed):
    with shipping_bed.domain_context():
        yield


@pytest.fixture()
def reference_data():
    """Sample ports and voyages, stored in the repositories."""
    seed_reference_data()

