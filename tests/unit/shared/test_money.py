from decimal import Decimal

import pytest

from skybooking.shared.domain import Currency, Money


class TestMoney:
    def test_negative_amount_is_rejected(self):
        with pytest.raises(ValueError):
            Money(amount=Decimal("-1"), currency=Currency.dzd())

    def test_amount_is_coerced_to_decimal(self):
        money = Money(amount=10, currency=Currency.dzd())
        assert money.amount == Decimal("10")

    def test_add(self):
        total = Money.dzd("10000").add(Money.dzd("2500.50"))
        assert total.amount == Decimal("12500.50")

    def test_cannot_add_different_currencies(self):
        with pytest.raises(ValueError):
            Money.dzd("10").add(Money(amount=Decimal("10"), currency=Currency("EUR")))

    def test_percentage_rounds_half_up_to_cents(self):
        assert Money.dzd("0.05").percentage(Decimal("0.5")).amount == Decimal("0.03")
        assert Money.dzd("20000").percentage(Decimal("0.5")).amount == Decimal("10000.00")

    def test_subtract_floored_never_goes_negative(self):
        """手数料が払い戻し額を上回る場合は 0"""
        assert Money.dzd("3000").subtract_floored(Money.dzd("5000")).is_zero()

    @pytest.mark.parametrize(
        "amount, differs",
        [
            (Decimal("100.00"), False),
            (Decimal("100.01"), False),
            (Decimal("99.99"), False),
            (Decimal("100.02"), True),
        ],
    )
    def test_differs_from_uses_one_cent_tolerance(self, amount, differs):
        assert Money.dzd("100").differs_from(amount) is differs


class TestCurrency:
    def test_code_is_normalized(self):
        assert Currency("eur").code == "EUR"

    def test_unsupported_currency(self):
        with pytest.raises(ValueError):
            Currency("JPY")
