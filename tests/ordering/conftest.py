import pytest


@pytest.fixture(scope="session", autouse=True)
def setup_db(ordering_domain):
    from shared.db import drop_db, setup_db

    setup_db(ordering_domain)

    yield

    drop_db(ordering_domain)


@pytest.fixture(autouse=True)
def run_around_tests(ordering_domain):
    """Push domain context before each test, cleanup after."""
    ctx = ordering_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
