from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class RewardOut(BaseModel):
    id: int
    type: str
    amount: int
    description: Optional[str] = None
    survey_id: Optional[int] = None
    survey_title: Optional[str] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class WalletOut(BaseModel):
    cash_balance: int
    coupons_count: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CouponIssue(BaseModel):
    amount: int = Field(gt=0)
    description: Optional[str] = None
    expiresAt: Optional[datetime] = None
