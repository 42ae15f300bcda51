import os
from pathlib import Path

import pytest
import structlog
from protean.integrations.pytest import DomainFixture


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Storefront configures its own logging, so Protean must not install its
    structlog setup when a domain initializes. Every session then starts from
    structlog's defaults so captured logs are predictable.
    """
    os.environ["PROTEAN_NO_AUTO_LOGGING"] = "1"
    structlog.reset_defaults()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def catalogue_bed():
    from catalogue.domain import catalogue

    bed = DomainFixture(catalogue)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def run_around_tests():
    """Reset process-wide logging and gateway state after every test."""
    yield

    from payments.gateway import reset_gateway
    from shared.logging import clear_context

    reset_gateway()
    clear_context()
    structlog.reset_defaults()
