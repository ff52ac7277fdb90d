import logging

from sqlalchemy.orm import Session

from app.errors import ForbiddenError, NotFoundError
from app.models.question import Question
from app.models.survey import Survey
from app.models.survey_response import SurveyResponse
from app.services.clock import to_naive_utc
from app.services.eligibility_service import question_count_column


logger = logging.getLogger(__name__)


def to_minor_units(amount) -> int | None:
    """Whole currency units as sent by clients -> stored minor units."""
    if amount is None:
        return None
    return int(round(float(amount) * 100))


def get_survey(db: Session, survey_id) -> Survey:
    survey = db.query(Survey).filter(Survey.id == survey_id).first()
    if not survey:
        raise NotFoundError("Survey not found")
    return survey


def get_owned_survey(db: Session, survey_id, business_id) -> Survey:
    survey = get_survey(db, survey_id)
    if survey.business_id != business_id:
        raise ForbiddenError("You don't have access to this survey")
    return survey


def create_survey(db: Session, business_id, payload) -> Survey:
    survey = Survey(
        business_id=business_id,
        title=payload.title,
        description=payload.description,
        status="active",
        estimated_time=payload.estimatedTime,
        reward=to_minor_units(payload.reward),
        max_responses=payload.maxResponses,
        response_count=0,
        expires_at=to_naive_utc(payload.expiresAt),
    )
    db.add(survey)
    db.flush()

    for position, q in enumerate(payload.questions, start=1):
        db.add(
            Question(
                survey_id=survey.id,
                text=q.text,
                type=q.type,
                options=q.options if q.type == "multiple_choice" else None,
                is_required=q.isRequired,
                order=position,
            )
        )
    db.flush()

    logger.info(
        "survey created",
        extra={"survey_id": survey.id, "business_id": business_id, "questions": len(payload.questions)},
    )
    return survey


def get_survey_with_questions(db: Session, survey_id) -> dict:
    survey = get_survey(db, survey_id)
    questions = (
        db.query(Question)
        .filter(Question.survey_id == survey.id)
        .order_by(Question.order.asc())
        .all()
    )
    return {"survey": survey, "questions": questions}


def list_business_surveys(db: Session, business_id) -> list[dict]:
    rows = (
        db.query(Survey, question_count_column())
        .filter(Survey.business_id == business_id)
        .order_by(Survey.created_at.desc(), Survey.id.desc())
        .all()
    )
    return [
        {
            "id": s.id,
            "title": s.title,
            "description": s.description,
            "status": s.status,
            "response_count": s.response_count or 0,
            "max_responses": s.max_responses,
            "expires_at": s.expires_at,
            "created_at": s.created_at,
            "question_count": int(qc or 0),
        }
        for s, qc in rows
    ]


def list_completed_surveys(db: Session, partner_id) -> list[dict]:
    rows = (
        db.query(Survey, SurveyResponse.completed_at)
        .join(SurveyResponse, SurveyResponse.survey_id == Survey.id)
        .filter(SurveyResponse.partner_id == partner_id)
        .order_by(SurveyResponse.completed_at.desc(), SurveyResponse.id.desc())
        .all()
    )
    return [
        {
            "id": s.id,
            "title": s.title,
            "description": s.description,
            "completed_at": completed_at,
            "reward": s.reward,
        }
        for s, completed_at in rows
    ]


def set_survey_status(db: Session, survey_id, business_id, status: str) -> Survey:
    survey = get_owned_survey(db, survey_id, business_id)
    survey.status = status
    db.flush()
    logger.info("survey status changed", extra={"survey_id": survey.id, "status": status})
    return survey
