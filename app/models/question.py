from sqlalchemy import Column, Integer, String, Text, Boolean, JSON, ForeignKey
from app.db import Base


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True)

    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)

    text = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)  # multiple_choice / text / rating

    # only meaningful for multiple_choice
    options = Column(JSON, nullable=True)

    is_required = Column(Boolean, default=True)
    order = Column(Integer, nullable=False)
