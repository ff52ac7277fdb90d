from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from app.db import Base


class BusinessProfile(Base):
    __tablename__ = "business_profiles"

    id = Column(Integer, primary_key=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    company_name = Column(String(255), nullable=False)
    industry = Column(String(100))
    size = Column(String(50))
    website = Column(String(255))

    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)
