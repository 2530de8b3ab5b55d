"""Fixtures for cross-domain integration tests.

These tests drive the whole API through the gateway, with every domain
initialized. Each request runs in the domain context of its route, so the
tests push a context only when they call a cross-domain event handler
directly, standing in for the Engine that delivers events in production.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="session", autouse=True)
def setup_databases(catalogue_domain, ordering_domain, loyalty_domain):
    """Create database schemas for all domains."""
    from shared.db import drop_db, setup_db

    for domain in (catalogue_domain, ordering_domain, loyalty_domain):
        setup_db(domain)

    yield

    for domain in (catalogue_domain, ordering_domain, loyalty_domain):
        drop_db(domain)


@pytest.fixture(autouse=True)
def run_around_tests(catalogue_domain, ordering_domain, loyalty_domain):
    """Reset every domain's data after each test."""
    yield

    from protean import current_domain

    for domain in (catalogue_domain, ordering_domain, loyalty_domain):
        with domain.domain_context():
            for _, provider in current_domain.providers.items():
                provider._data_reset()

            current_domain.event_store.store._data_reset()


@pytest.fixture()
def client(catalogue_domain, ordering_domain, loyalty_domain):
    from gateway import create_app

    return TestClient(create_app(catalogue_domain, ordering_domain, loyalty_domain))
