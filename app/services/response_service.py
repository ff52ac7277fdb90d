"""
Survey response submission.

Everything a submission writes (the response row, its answers, the
survey's response counter and the partner's cash reward) goes into the
caller's transaction. Nothing is committed here; on any failure the
session is rolled back before the error propagates.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import ConflictError, InvalidArgumentError, NotFoundError
from app.models.answer import Answer
from app.models.question import Question
from app.models.survey import Survey
from app.models.survey_response import SurveyResponse
from app.services.clock import utcnow
from app.services.eligibility_service import get_partner, open_for_responses
from app.services.reward_service import credit_survey_reward


logger = logging.getLogger(__name__)

ALREADY_COMPLETED = "You have already completed this survey"
NOT_ACCEPTING = "This survey is no longer accepting responses"


def _answer_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _has_response(db: Session, partner_id, survey_id) -> bool:
    return (
        db.query(SurveyResponse.id)
        .filter(SurveyResponse.partner_id == partner_id, SurveyResponse.survey_id == survey_id)
        .first()
        is not None
    )


def submit_response(db: Session, partner_id, survey_id, answers) -> SurveyResponse:
    partner = get_partner(db, partner_id)

    survey = db.query(Survey).filter(Survey.id == survey_id).first()
    if not survey:
        raise NotFoundError("Survey not found")

    if _has_response(db, partner.id, survey.id):
        logger.info("duplicate response rejected", extra={"partner_id": partner.id, "survey_id": survey.id})
        raise ConflictError(ALREADY_COMPLETED)

    question_ids = {
        qid for (qid,) in db.query(Question.id).filter(Question.survey_id == survey.id).all()
    }
    seen = set()
    for answer in answers:
        if answer.questionId not in question_ids:
            raise InvalidArgumentError(f"Question {answer.questionId} does not belong to this survey")
        if answer.questionId in seen:
            raise InvalidArgumentError(f"Question {answer.questionId} answered more than once")
        seen.add(answer.questionId)

    # Claims a slot only while the survey is still open; this re-checks
    # status, capacity and expiry at write time.
    claimed = (
        db.query(Survey)
        .filter(Survey.id == survey.id)
        .filter(open_for_responses(utcnow()))
        .update({Survey.response_count: Survey.response_count + 1}, synchronize_session="fetch")
    )
    if claimed != 1:
        db.rollback()
        logger.info("response rejected: survey closed", extra={"partner_id": partner_id, "survey_id": survey_id})
        raise ConflictError(NOT_ACCEPTING)

    response = SurveyResponse(survey_id=survey.id, partner_id=partner.id)
    db.add(response)
    try:
        db.flush()
    except IntegrityError:
        # lost the race against a concurrent submission for the same pair
        db.rollback()
        logger.info("duplicate response rejected", extra={"partner_id": partner_id, "survey_id": survey_id})
        raise ConflictError(ALREADY_COMPLETED)

    for answer in answers:
        db.add(
            Answer(
                response_id=response.id,
                question_id=answer.questionId,
                value=_answer_value(answer.value),
            )
        )

    credit_survey_reward(db, partner.id, survey)
    db.flush()

    logger.info(
        "survey response submitted",
        extra={"partner_id": partner.id, "survey_id": survey.id, "response_id": response.id, "answers": len(answers)},
    )
    return response
