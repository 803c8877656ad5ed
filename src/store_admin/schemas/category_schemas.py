from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass
class CategoryDto:
    """Validated category fields as supplied by the client (create and full update)"""
    name: str
    slug: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CategoryResponse(BaseModel):
    """Category in API responses"""
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 12,
                "store_id": 3,
                "name": "Running Shoes",
                "slug": "running-shoes",
                "description": "Road and trail running shoes",
                "created_at": "2026-01-03T10:30:00+00:00",
                "updated_at": "2026-01-03T10:30:00+00:00",
            }
        },
    )

    id: int = Field(description="Unique category identifier")
    store_id: int = Field(description="Owning store identifier")
    name: str = Field(description="Display name")
    slug: str = Field(description="URL-safe identifier, unique per store")
    description: Optional[str] = Field(default=None, description="Optional description")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
