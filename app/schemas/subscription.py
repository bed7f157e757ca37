from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class SubscriptionSchema(BaseModel):
    """A stored subscription as returned to callers."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    service_name: str
    price: int
    user_id: str
    start_date: date
    end_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime


class SubscriptionCreate(BaseModel):
    service_name: Optional[str] = Field(default=None, examples=["Netflix"])
    price: Optional[StrictInt] = Field(default=None, examples=[400])
    user_id: Optional[str] = Field(default=None, examples=["60601fee-2bf1-4721-ae6f-7636e79a0cba"])
    start_date: Optional[str] = Field(default=None, examples=["07-2025"])
    end_date: Optional[str] = Field(default=None, examples=["12-2025"])


class SubscriptionUpdate(SubscriptionCreate):
    """Partial update; fields left out, empty, or non-positive keep their stored value."""


class SubscriptionSum(BaseModel):
    sum: int
