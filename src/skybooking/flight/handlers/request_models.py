from pydantic import BaseModel, Field


class SearchFlightsRequest(BaseModel):
    """フライト検索リクエストモデル（クエリ文字列）"""

    departure_city: str = Field(..., min_length=1, alias="from")
    arrival_city: str = Field(..., min_length=1, alias="to")
    date: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="出発日（YYYY-MM-DD）",
    )
    passengers: int = Field(default=1, ge=1, le=9)
