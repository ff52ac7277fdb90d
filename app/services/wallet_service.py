from sqlalchemy.orm import Session
from sqlalchemy import func

from app.models.payout_request import PayoutRequest
from app.models.reward import Reward


def get_cash_balance(db: Session, partner_id) -> int:
    credited = (
        db.query(func.coalesce(func.sum(Reward.amount), 0))
        .filter(Reward.partner_id == partner_id, Reward.type == "cash")
        .scalar()
    )

    paid_out = (
        db.query(func.coalesce(func.sum(PayoutRequest.amount), 0))
        .filter(PayoutRequest.partner_id == partner_id, PayoutRequest.status == "completed")
        .scalar()
    )

    return int(credited or 0) - int(paid_out or 0)


def get_wallet(db: Session, partner_id) -> dict:
    # expired coupons are still counted
    coupons = (
        db.query(func.count(Reward.id))
        .filter(Reward.partner_id == partner_id, Reward.type == "coupon")
        .scalar()
    )

    return {
        "cash_balance": get_cash_balance(db, partner_id),
        "coupons_count": int(coupons or 0),
    }
