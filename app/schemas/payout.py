from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


PayoutStatus = Literal["pending", "approved", "rejected", "completed"]


class PayoutCreate(BaseModel):
    # minor currency units; sign is checked by the service
    amount: int


class PayoutStatusUpdate(BaseModel):
    status: PayoutStatus


class PayoutOut(BaseModel):
    id: int
    partner_id: int
    amount: int
    status: str
    requested_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
