from sqlalchemy import Column, Integer, Text, ForeignKey
from app.db import Base


class Answer(Base):
    __tablename__ = "answers"

    id = Column(Integer, primary_key=True)

    response_id = Column(Integer, ForeignKey("survey_responses.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False)

    # ratings and selected options are stored as text too
    value = Column(Text, nullable=False)
