from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from app.db import Base


class Reward(Base):
    __tablename__ = "rewards"

    id = Column(Integer, primary_key=True)

    partner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(20), nullable=False)  # cash / coupon
    amount = Column(Integer, nullable=False)  # minor currency units
    description = Column(String(255))

    survey_id = Column(Integer, ForeignKey("surveys.id"), nullable=True)

    # coupons only, informational
    expires_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)
