import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def store_bed():
    from store.domain import store

    bed = DomainFixture(store)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(store_bed):
    with store_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()
