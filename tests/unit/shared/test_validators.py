from datetime import date

import pytest

from skybooking.shared.utils.validators import (
    is_valid_card_number,
    is_valid_cvv,
    is_valid_expiry,
    is_valid_phone,
    mask_card_number,
    mask_tail,
)


class TestCardValidators:
    @pytest.mark.parametrize(
        "card_number, valid",
        [
            ("4111111111111111", True),
            ("4111 1111 1111 1111", True),
            ("41111111111111112222", True),
            ("411111111111111", False),
            ("4111-1111-1111-1111", False),
            ("", False),
        ],
    )
    def test_card_number(self, card_number, valid):
        assert is_valid_card_number(card_number) is valid

    @pytest.mark.parametrize("cvv, valid", [("123", True), ("12", False), ("1234", False), ("12a", False)])
    def test_cvv(self, cvv, valid):
        assert is_valid_cvv(cvv) is valid

    @pytest.mark.parametrize(
        "expiry, valid",
        [
            ("12/25", True),
            ("01/26", True),
            ("11/25", False),
            ("13/26", False),
            ("00/26", False),
            ("1225", False),
        ],
    )
    def test_expiry_in_current_month_is_valid(self, expiry, valid):
        """当月が期限のカードは有効"""
        assert is_valid_expiry(expiry, date(2025, 12, 15)) is valid

    def test_mask_card_number_keeps_last_four_digits(self):
        assert mask_card_number("4111 1111 1111 1234") == "**** **** **** 1234"


class TestContactValidators:
    @pytest.mark.parametrize(
        "phone, valid",
        [
            ("+213555123456", True),
            ("0555 12 34 56", True),
            ("12345", False),
            ("+213-555-123456", False),
        ],
    )
    def test_phone_ignores_whitespace(self, phone, valid):
        assert is_valid_phone(phone) is valid

    def test_mask_tail(self):
        assert mask_tail("P12345678") == "*****5678"
