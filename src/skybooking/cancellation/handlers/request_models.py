from pydantic import BaseModel, Field


class CancelReservationRequest(BaseModel):
    """予約キャンセルリクエストモデル"""

    reason: str = Field(default="Cancelled by customer", min_length=1)


class ModifySeatsRequest(BaseModel):
    """座席変更リクエストモデル（座席数は変更前と同じであること）"""

    seat_numbers: list[str] = Field(..., min_length=1)


class ChangeFlightRequest(BaseModel):
    """便の振替リクエストモデル"""

    flight_id: str = Field(..., min_length=1)
