import logging

from sqlalchemy.orm import Session

from app.models.reward import Reward
from app.models.survey import Survey
from app.models.user import User
from app.errors import InvalidArgumentError, NotFoundError
from app.services.clock import to_naive_utc


logger = logging.getLogger(__name__)


# ============================================================
# CREDIT (on response submission)
# ============================================================
def credit_survey_reward(db: Session, partner_id, survey: Survey):
    if not survey.reward or survey.reward <= 0:
        return None

    reward = Reward(
        partner_id=partner_id,
        type="cash",
        amount=survey.reward,
        description=f'Reward for completing "{survey.title}"',
        survey_id=survey.id,
    )
    db.add(reward)
    db.flush()

    return reward


# ============================================================
# ISSUE COUPON (back-office)
# ============================================================
def issue_coupon(db: Session, partner_id, payload):
    partner = db.query(User).filter(User.id == partner_id).first()
    if not partner or partner.role != "partner":
        raise NotFoundError("Partner not found")

    if payload.amount <= 0:
        raise InvalidArgumentError("Coupon amount must be positive")

    coupon = Reward(
        partner_id=partner.id,
        type="coupon",
        amount=payload.amount,
        description=payload.description,
        expires_at=to_naive_utc(payload.expiresAt),
    )
    db.add(coupon)
    db.flush()

    logger.info("coupon issued", extra={"partner_id": partner.id, "amount": coupon.amount})
    return coupon


def list_rewards(db: Session, partner_id) -> list[dict]:
    rows = (
        db.query(Reward, Survey.title)
        .outerjoin(Survey, Reward.survey_id == Survey.id)
        .filter(Reward.partner_id == partner_id)
        .order_by(Reward.created_at.desc(), Reward.id.desc())
        .all()
    )

    return [
        {
            "id": r.id,
            "type": r.type,
            "amount": r.amount,
            "description": r.description,
            "survey_id": r.survey_id,
            "survey_title": title,
            "expires_at": r.expires_at,
            "created_at": r.created_at,
        }
        for r, title in rows
    ]
