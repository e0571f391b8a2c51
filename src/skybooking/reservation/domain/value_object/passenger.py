from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from pydantic import EmailStr, TypeAdapter, ValidationError

from skybooking.shared.domain.exception import ValidationException
from skybooking.shared.utils.validators import (
    is_blank,
    is_valid_phone,
    mask_tail,
)

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class Passenger:
    """搭乗者

    予約・航空券に埋め込まれる値オブジェクト（単独では永続化しない）。
    """

    first_name: str
    last_name: str
    passport_number: str
    date_of_birth: str
    email: str
    phone: str

    def __post_init__(self) -> None:
        missing = [
            name
            for name in (
                "first_name",
                "last_name",
                "passport_number",
                "date_of_birth",
                "email",
                "phone",
            )
            if is_blank(getattr(self, name))
        ]
        if missing:
            raise ValidationException(
                f"Passenger is missing required fields: {', '.join(missing)}"
            )
        try:
            date.fromisoformat(self.date_of_birth)
        except ValueError as e:
            raise ValidationException(
                f"Invalid date of birth: {self.date_of_birth}"
            ) from e
        try:
            _EMAIL_ADAPTER.validate_python(self.email.strip())
        except ValidationError as e:
            raise ValidationException(f"Invalid email: {self.email}") from e
        if not is_valid_phone(self.phone):
            raise ValidationException(f"Invalid phone number: {self.phone}")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def masked_passport(self) -> str:
        """パスポート番号（末尾4文字のみ表示）"""
        return mask_tail(self.passport_number)

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "passport_number": self.passport_number,
            "date_of_birth": self.date_of_birth,
            "email": self.email,
            "phone": self.phone,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Passenger:
        return cls(
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            passport_number=data.get("passport_number", ""),
            date_of_birth=data.get("date_of_birth", ""),
            email=data.get("email", ""),
            phone=data.get("phone", ""),
        )
