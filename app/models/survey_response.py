from sqlalchemy import Column, Integer, TIMESTAMP, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.db import Base


class SurveyResponse(Base):
    __tablename__ = "survey_responses"

    __table_args__ = (
        UniqueConstraint("survey_id", "partner_id", name="uq_survey_responses_survey_partner"),
    )

    id = Column(Integer, primary_key=True)

    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    partner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    completed_at = Column(TIMESTAMP, server_default=func.now(), nullable=False)
