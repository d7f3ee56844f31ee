from __future__ import annotations
from datetime import datetime
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Bullet = Annotated[str, Field(max_length=120)]

class Review(BaseModel):
    review_id: Optional[int] = None
    product_id: Optional[int] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

class Product(BaseModel):
    product_id: int
    name: Optional[str] = None
    average_rating: float = 0.0
    review_count: int = 0

class SummaryResult(BaseModel):
    pros: List[Bullet] = Field(default_factory=list, max_length=3)
    cons: List[Bullet] = Field(default_factory=list, max_length=3)

class ReviewSummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: Literal["AI", "LOCAL"]
    average_rating: float = Field(alias="averageRating")
    review_count: int = Field(alias="reviewCount")
    pros: List[Bullet] = Field(default_factory=list, max_length=3)
    cons: List[Bullet] = Field(default_factory=list, max_length=3)
