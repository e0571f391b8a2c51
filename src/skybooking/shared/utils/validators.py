import re
from datetime import date
from decimal import Decimal
from typing import Final

PHONE_PATTERN: Final = re.compile(r"^\+?[0-9]{10,15}$")
CVV_PATTERN: Final = re.compile(r"^\d{3}$")
EXPIRY_PATTERN: Final = re.compile(r"^(\d{2})/(\d{2})$")

MIN_CARD_NUMBER_LENGTH: Final[int] = 16


def to_decimal(v: object) -> Decimal:
    """任意の値を Decimal に変換する

    Pydantic の field_validator (mode="before") から呼び出すことを想定。
    すでに Decimal の場合はそのまま返し、それ以外は str 経由で変換する。
    """
    if isinstance(v, Decimal):
        return v
    return Decimal(str(v))


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_phone(phone: str | None) -> bool:
    """電話番号の書式チェック（空白は無視する）

    先頭の + は任意、数字 10〜15 桁。
    """
    if is_blank(phone):
        return False
    compact = re.sub(r"\s+", "", phone)
    return PHONE_PATTERN.match(compact) is not None


def normalize_card_number(card_number: str) -> str:
    return card_number.replace(" ", "")


def is_valid_card_number(card_number: str | None) -> bool:
    """カード番号チェック（空白除去後 16 桁以上の数字）"""
    if is_blank(card_number):
        return False
    digits = normalize_card_number(card_number)
    return digits.isdigit() and len(digits) >= MIN_CARD_NUMBER_LENGTH


def is_valid_cvv(cvv: str | None) -> bool:
    """CVV は数字ちょうど 3 桁"""
    if cvv is None:
        return False
    return CVV_PATTERN.match(cvv) is not None


def is_valid_expiry(expiry_date: str | None, today: date) -> bool:
    """有効期限（MM/YY）のチェック

    当月が期限のカードは有効とみなす。
    """
    if expiry_date is None:
        return False
    match = EXPIRY_PATTERN.match(expiry_date.strip())
    if match is None:
        return False

    month = int(match.group(1))
    year = int(match.group(2))
    if month < 1 or month > 12:
        return False

    current_year = today.year % 100
    current_month = today.month
    return year > current_year or (year == current_year and month >= current_month)


def mask_card_number(card_number: str) -> str:
    """カード番号の末尾4桁のみ表示する"""
    digits = normalize_card_number(card_number)
    if len(digits) < 4:
        return "****"
    return f"**** **** **** {digits[-4:]}"


def mask_tail(value: str, visible: int = 4) -> str:
    """末尾 visible 文字以外を * で伏せる（パスポート番号など）"""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
