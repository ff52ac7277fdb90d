from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from app.db import Base


class PartnerProfile(Base):
    __tablename__ = "partner_profiles"

    id = Column(Integer, primary_key=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    age = Column(Integer)
    gender = Column(String(30))
    location = Column(String(100))
    occupation = Column(String(100))
    education = Column(String(100))

    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)
