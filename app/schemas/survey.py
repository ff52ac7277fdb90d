from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


QuestionType = Literal["multiple_choice", "text", "rating"]
SurveyStatus = Literal["draft", "active", "completed"]


class QuestionCreate(BaseModel):
    text: str = Field(min_length=1)
    type: QuestionType
    options: Optional[list[str]] = None
    isRequired: bool = True


class SurveyCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    estimatedTime: Optional[int] = Field(default=None, ge=0)

    # whole currency units, stored in minor units
    reward: Optional[float] = Field(default=None, ge=0)

    maxResponses: Optional[int] = Field(default=None, ge=1)
    expiresAt: Optional[datetime] = None
    questions: list[QuestionCreate] = []


class SurveyStatusUpdate(BaseModel):
    status: SurveyStatus


class _CamelOut(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class SurveyOut(_CamelOut):
    id: int
    business_id: int
    title: str
    description: Optional[str] = None
    status: str
    estimated_time: Optional[int] = None
    reward: Optional[int] = None
    max_responses: Optional[int] = None
    response_count: int = 0
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class QuestionOut(_CamelOut):
    id: int
    survey_id: int
    text: str
    type: str
    options: Optional[list[str]] = None
    is_required: Optional[bool] = True
    order: int


class SurveyDetailOut(_CamelOut):
    survey: SurveyOut
    questions: list[QuestionOut]


class AvailableSurveyOut(_CamelOut):
    id: int
    title: str
    description: Optional[str] = None
    estimated_time: Optional[int] = None
    reward: Optional[int] = None
    expires_at: Optional[datetime] = None
    question_count: int


class BusinessSurveyOut(_CamelOut):
    id: int
    title: str
    description: Optional[str] = None
    status: str
    response_count: int = 0
    max_responses: Optional[int] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    question_count: int


class CompletedSurveyOut(_CamelOut):
    id: int
    title: str
    description: Optional[str] = None
    completed_at: datetime
    reward: Optional[int] = None
