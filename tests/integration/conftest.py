import pytest


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed, ordering_bed):
    with ordering_bed.domain_context():
        yield
