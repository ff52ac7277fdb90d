from sqlalchemy import CheckConstraint, Column, Integer, String, Text, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from app.db import Base


class Survey(Base):
    __tablename__ = "surveys"

    __table_args__ = (
        CheckConstraint(
            "max_responses IS NULL OR response_count <= max_responses",
            name="ck_surveys_response_count_within_max",
        ),
    )

    id = Column(Integer, primary_key=True)

    business_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text)

    status = Column(String(20), nullable=False, default="draft")
    # draft | active | completed

    estimated_time = Column(Integer)  # minutes

    # minor currency units
    reward = Column(Integer)

    max_responses = Column(Integer, nullable=True)
    response_count = Column(Integer, nullable=False, default=0)

    expires_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)
