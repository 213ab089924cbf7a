"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from receiving.domain.exceptions import InvalidQuantity, ValidationError
from receiving.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "BRL"

    def test_of_factory_from_string(self):
        m = Money.of("25.99")
        assert m.amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_count(self):
        assert Money.of("8.50") * 3 == Money.of("25.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1.00") * 1.5

    def test_different_currencies_cannot_be_added(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("1", "BRL") + Money.of("1", "USD")

    def test_zero(self):
        assert Money.zero() == Money.of("0")

    def test_str(self):
        assert str(Money.of("3.5")) == "3.50 BRL"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive_accepted(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_rejected(self, value):
        with pytest.raises(InvalidQuantity, match="must be positive"):
            Quantity(value)

    @pytest.mark.parametrize("value", [2.5, "3", True])
    def test_non_integer_rejected(self, value):
        with pytest.raises(InvalidQuantity, match="must be an integer"):
            Quantity(value)

    def test_invalid_quantity_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            Quantity(0)
