from dataclasses import dataclass, field
from datetime import date

from skybooking.shared.domain.exception import InvalidCardException
from skybooking.shared.utils.validators import (
    is_blank,
    is_valid_card_number,
    is_valid_cvv,
    is_valid_expiry,
    mask_card_number,
)


@dataclass(frozen=True)
class CardDetails:
    """カード情報

    カード番号と CVV は永続化・ログ出力しない（マスク済みの番号のみ扱う）。
    """

    card_number: str = field(repr=False)
    card_holder: str
    expiry_date: str
    cvv: str = field(repr=False)

    @property
    def masked_number(self) -> str:
        return mask_card_number(self.card_number)

    def validate(self, today: date) -> None:
        """カード情報を検証する（当月期限のカードは有効）"""
        if not is_valid_card_number(self.card_number):
            raise InvalidCardException("Card number must contain at least 16 digits")
        if is_blank(self.card_holder):
            raise InvalidCardException("Card holder name is required")
        if not is_valid_cvv(self.cvv):
            raise InvalidCardException("CVV must be exactly 3 digits")
        if not is_valid_expiry(self.expiry_date, today):
            raise InvalidCardException(
                f"Card expired or invalid expiry date: {self.expiry_date}"
            )
