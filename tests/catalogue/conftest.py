import pytest
from catalogue.product.product import Product


class RecordingListener:
    def __init__(self, name="listener", journal=None):
        self.name = name
        self.journal = journal if journal is not None else []

    def on_out_of_stock(self, product_name):
        self.journal.append((self.name, product_name))


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed):
    with catalogue_bed.domain_context():
        yield


@pytest.fixture
def smartphone():
    return Product.physical("Smartphone", "999.99", 10, 0.2)


@pytest.fixture
def ebook():
    return Product.digital("Python Programming Guide", "29.99", 100, "download.example.com/ebook")


@pytest.fixture
def listener():
    return RecordingListener()
