"""Tests for out-of-stock notifications."""

import pytest
from catalogue.product.alerts import OutOfStockAlert
from catalogue.product.product import OutOfStockListener, Product
from structlog.testing import capture_logs


class Recorder:
    def __init__(self, name, journal):
        self.name = name
        self.journal = journal

    def on_out_of_stock(self, product_name):
        self.journal.append((self.name, product_name))


class TestNotification:
    def test_reaching_zero_notifies_once(self, smartphone, listener):
        smartphone.add_out_of_stock_listener(listener)
        smartphone.deduct_stock(10)
        assert listener.journal == [("listener", "Smartphone")]

    def test_positive_remainder_does_not_notify(self, smartphone, listener):
        smartphone.add_out_of_stock_listener(listener)
        smartphone.deduct_stock(9)
        assert listener.journal == []

    def test_failed_deduction_does_not_notify(self, smartphone, listener):
        smartphone.add_out_of_stock_listener(listener)
        smartphone.deduct_stock(11)
        assert listener.journal == []

    def test_each_deduction_reaching_zero_notifies(self, smartphone, listener):
        smartphone.add_out_of_stock_listener(listener)
        smartphone.deduct_stock(10)
        smartphone.restore_stock(2)
        smartphone.deduct_stock(2)
        assert len(listener.journal) == 2

    def test_zero_deduction_on_empty_product_notifies(self, listener):
        product = Product.physical("Cable", "9.99", 0, 0.05)
        product.add_out_of_stock_listener(listener)
        assert product.deduct_stock(0) is True
        assert listener.journal == [("listener", "Cable")]

    def test_listeners_called_in_registration_order(self, smartphone):
        journal = []
        for name in ("first", "second", "third"):
            smartphone.add_out_of_stock_listener(Recorder(name, journal))

        smartphone.deduct_stock(10)

        assert [name for name, _ in journal] == ["first", "second", "third"]

    def test_notification_happens_before_deduct_returns(self, smartphone):
        seen_stock = []

        class Inspector:
            def on_out_of_stock(self, product_name):
                seen_stock.append(smartphone.stock_quantity)

        smartphone.add_out_of_stock_listener(Inspector())
        smartphone.deduct_stock(10)
        assert seen_stock == [0]

    def test_removed_listener_is_not_called(self, smartphone, listener):
        smartphone.add_out_of_stock_listener(listener)
        smartphone.remove_out_of_stock_listener(listener)
        smartphone.deduct_stock(10)
        assert listener.journal == []

    def test_removing_unknown_listener_raises(self, smartphone, listener):
        with pytest.raises(ValueError):
            smartphone.remove_out_of_stock_listener(listener)

    def test_listener_satisfies_protocol(self, listener):
        assert isinstance(listener, OutOfStockListener)


class TestOutOfStockAlert:
    def test_alert_logs_warning(self, smartphone):
        alert = OutOfStockAlert()
        smartphone.add_out_of_stock_listener(alert)

        with capture_logs() as logs:
            smartphone.deduct_stock(10)

        assert alert.alerted == ["Smartphone"]
        assert logs == [
            {"event": "Alert: Smartphone is out of stock!", "log_level": "warning", "product": "Smartphone"}
        ]
