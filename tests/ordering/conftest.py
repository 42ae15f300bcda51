import pytest
from catalogue.product.product import Product
from identity.customer.customer import Customer
from ordering.order.order import Order
from payments.gateway.fake_adapter import FakeGateway


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed, ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture
def customer():
    return Customer(first_name="John", last_name="Doe")


@pytest.fixture
def smartphone():
    return Product.physical("Smartphone", "999.99", 10, 0.2)


@pytest.fixture
def laptop():
    return Product.physical("Laptop", "1499.99", 5, 2.0)


@pytest.fixture
def order(customer):
    return Order.create(customer)


@pytest.fixture
def approving_gateway():
    return FakeGateway(should_succeed=True)


@pytest.fixture
def declining_gateway():
    return FakeGateway(should_succeed=False)
