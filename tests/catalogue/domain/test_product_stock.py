"""Tests for Product stock movements: deduction and restoration."""

from decimal import Decimal

import pytest
from catalogue.product.product import Product
from protean.exceptions import ValidationError
from structlog.testing import capture_logs


class TestProductConstruction:
    def test_price_is_decimal(self, smartphone):
        assert smartphone.unit_price == Decimal("999.99")

    def test_float_price_keeps_its_digits(self):
        product = Product.physical("Cable", 9.99, 1, 0.05)
        assert product.unit_price == Decimal("9.99")

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Product.physical("Cable", "9.99", -1, 0.05)
        assert "stock_quantity" in exc_info.value.messages

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Product.physical("Cable", "-1", 1, 0.05)
        assert "unit_price" in exc_info.value.messages

    @pytest.mark.parametrize("stock", [2.5, 10.0, "10", True])
    def test_stock_must_be_a_whole_number(self, stock):
        with pytest.raises(ValidationError) as exc_info:
            Product.physical("Cable", "9.99", stock, 0.05)
        assert "stock_quantity" in exc_info.value.messages

    def test_stock_cannot_be_set_below_zero(self, smartphone):
        with pytest.raises(ValidationError):
            smartphone.stock_quantity = -1
        assert smartphone.stock_quantity == 10


class TestDeductStock:
    def test_deduct_within_stock_succeeds(self, smartphone):
        assert smartphone.deduct_stock(3) is True
        assert smartphone.stock_quantity == 7

    def test_deduct_exact_stock_succeeds(self, smartphone):
        assert smartphone.deduct_stock(10) is True
        assert smartphone.stock_quantity == 0

    def test_deduct_more_than_stock_fails_without_mutation(self, smartphone):
        assert smartphone.deduct_stock(11) is False
        assert smartphone.stock_quantity == 10

    def test_deduct_zero_is_a_no_op(self, smartphone):
        assert smartphone.deduct_stock(0) is True
        assert smartphone.stock_quantity == 10

    def test_negative_deduction_rejected(self, smartphone):
        with pytest.raises(ValidationError):
            smartphone.deduct_stock(-1)
        assert smartphone.stock_quantity == 10

    @pytest.mark.parametrize("quantity", [1.5, 2.0, "2", True])
    def test_fractional_or_non_numeric_deduction_rejected(self, smartphone, quantity):
        with pytest.raises(ValidationError):
            smartphone.deduct_stock(quantity)
        assert smartphone.stock_quantity == 10
        assert type(smartphone.stock_quantity) is int

    def test_deduct_from_empty_product_fails(self):
        product = Product.physical("Cable", "9.99", 0, 0.05)
        assert product.deduct_stock(1) is False
        assert product.stock_quantity == 0

    def test_stock_never_goes_negative(self, smartphone):
        sequence = [4, 4, 4, -3, 5, 5, -10, 11, 11]
        for step in sequence:
            if step < 0:
                smartphone.restore_stock(-step)
            else:
                smartphone.deduct_stock(step)
            assert smartphone.stock_quantity >= 0
        assert smartphone.stock_quantity == 10


class TestRestoreStock:
    def test_restore_increments_stock(self, smartphone):
        smartphone.restore_stock(5)
        assert smartphone.stock_quantity == 15

    def test_restore_has_no_upper_bound(self, smartphone):
        smartphone.restore_stock(1_000)
        assert smartphone.stock_quantity == 1_010

    def test_negative_restore_rejected(self, smartphone):
        with pytest.raises(ValidationError):
            smartphone.restore_stock(-2)

    @pytest.mark.parametrize("quantity", [0.5, "3", False])
    def test_fractional_or_non_numeric_restore_rejected(self, smartphone, quantity):
        with pytest.raises(ValidationError):
            smartphone.restore_stock(quantity)
        assert smartphone.stock_quantity == 10

    def test_restore_logs_new_stock_level(self, smartphone):
        smartphone.deduct_stock(4)
        with capture_logs() as logs:
            smartphone.restore_stock(4)

        assert logs == [
            {
                "event": "Restored 4 units to Smartphone. New stock: 10",
                "log_level": "info",
                "product": "Smartphone",
                "quantity": 4,
                "new_stock": 10,
            }
        ]

    def test_deduct_does_not_log(self, smartphone):
        with capture_logs() as logs:
            smartphone.deduct_stock(1)
        assert logs == []
