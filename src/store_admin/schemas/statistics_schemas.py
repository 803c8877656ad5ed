from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SummaryMetric(BaseModel):
    """One tile of the store summary (revenue, counts, rating)"""
    id: int = Field(description="Stable position of the metric, 1-based")
    name: str = Field(description="Human-readable metric name")
    value: Union[int, float] = Field(description="Metric value; money is in cents")

    model_config = ConfigDict(
        json_schema_extra={"example": {"id": 1, "name": "Revenue", "value": 2300}}
    )


class DailySale(BaseModel):
    """Sales of one calendar day within the trailing window"""
    date: str = Field(description="Day label, e.g. '18 oct'")
    value: int = Field(ge=0, description="Sum of price x quantity in cents")


class LastUserSale(BaseModel):
    """A recent buyer and the value of their latest order in this store"""
    id: int
    name: str
    email: str
    picture: Optional[str] = None
    total: int = Field(ge=0, description="Store items in the user's latest order, in cents")


class TrendsReport(BaseModel):
    """Trend block: sparse daily sales plus the latest buyers"""
    daily_sales: List[DailySale] = Field(default_factory=list)
    last_users: List[LastUserSale] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "daily_sales": [
                    {"date": "17 oct", "value": 4599},
                    {"date": "18 oct", "value": 2300},
                ],
                "last_users": [
                    {
                        "id": 42,
                        "name": "Alice",
                        "email": "alice@example.com",
                        "picture": None,
                        "total": 2300,
                    }
                ],
            }
        }
    )
