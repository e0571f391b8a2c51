from pydantic import BaseModel, EmailStr, Field, model_validator


class PassengerRequest(BaseModel):
    """搭乗者リクエストモデル

    電話番号の書式はドメイン側で検証する。
    """

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    passport_number: str = Field(..., min_length=1)
    date_of_birth: str = Field(..., description="生年月日（YYYY-MM-DD）")
    email: EmailStr
    phone: str


class CreateReservationRequest(BaseModel):
    """予約作成リクエストモデル"""

    customer_id: str = Field(..., min_length=1)
    flight_id: str = Field(..., min_length=1)
    seat_numbers: list[str] = Field(..., min_length=1)
    passengers: list[PassengerRequest] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_seat_passenger_count(self) -> "CreateReservationRequest":
        if len(self.seat_numbers) != len(self.passengers):
            raise ValueError("seat_numbers and passengers must have the same length")
        return self
