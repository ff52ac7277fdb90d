from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from app.errors import NotFoundError
from app.models.question import Question
from app.models.survey import Survey
from app.models.survey_response import SurveyResponse
from app.models.user import User
from app.services.clock import utcnow


def open_for_responses(now):
    """Survey-level part of eligibility: active, below capacity, not expired."""
    return and_(
        Survey.status == "active",
        or_(Survey.max_responses.is_(None), Survey.response_count < Survey.max_responses),
        or_(Survey.expires_at.is_(None), Survey.expires_at > now),
    )


def question_count_column():
    return (
        select(func.count(Question.id))
        .where(Question.survey_id == Survey.id)
        .correlate(Survey)
        .scalar_subquery()
        .label("question_count")
    )


def get_partner(db: Session, partner_id) -> User:
    partner = db.query(User).filter(User.id == partner_id).first()
    if not partner or partner.role != "partner":
        raise NotFoundError("Partner not found")
    return partner


def get_available_surveys(db: Session, partner_id) -> list[dict]:
    partner = get_partner(db, partner_id)

    answered = select(SurveyResponse.survey_id).where(SurveyResponse.partner_id == partner.id)

    rows = (
        db.query(Survey, question_count_column())
        .filter(open_for_responses(utcnow()))
        .filter(Survey.id.not_in(answered))
        .order_by(Survey.id.asc())
        .all()
    )

    return [
        {
            "id": s.id,
            "title": s.title,
            "description": s.description,
            "estimated_time": s.estimated_time,
            "reward": s.reward,
            "expires_at": s.expires_at,
            "question_count": int(qc or 0),
        }
        for s, qc in rows
    ]
