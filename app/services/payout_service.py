import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.errors import InsufficientBalanceError, InvalidArgumentError, NotFoundError
from app.models.payout_request import PayoutRequest
from app.models.user import User
from app.services.clock import utcnow
from app.services.wallet_service import get_cash_balance


logger = logging.getLogger(__name__)

# status -> statuses it may move to; completed and rejected are final
PAYOUT_TRANSITIONS = {
    "pending": {"approved", "rejected", "completed"},
    "approved": {"completed", "rejected"},
    "rejected": set(),
    "completed": set(),
}


def request_payout(db: Session, partner_id, amount: int) -> PayoutRequest:
    if amount is None or amount <= 0:
        raise InvalidArgumentError("Invalid amount")

    # serialize concurrent requests of the same partner
    partner = db.query(User).filter(User.id == partner_id).with_for_update().first()
    if not partner:
        raise NotFoundError("Partner not found")

    balance = get_cash_balance(db, partner.id)
    if amount > balance:
        logger.info(
            "payout rejected: insufficient balance",
            extra={"partner_id": partner.id, "amount": amount, "balance": balance},
        )
        raise InsufficientBalanceError("Insufficient balance")

    payout = PayoutRequest(partner_id=partner.id, amount=amount, status="pending")
    db.add(payout)
    db.flush()

    logger.info("payout requested", extra={"partner_id": partner.id, "amount": amount})
    return payout


def list_payouts(db: Session, partner_id):
    return (
        db.query(PayoutRequest)
        .filter(PayoutRequest.partner_id == partner_id)
        .order_by(PayoutRequest.requested_at.desc(), PayoutRequest.id.desc())
        .all()
    )


def _ensure_covered(db: Session, payout: PayoutRequest):
    """Approved-but-unpaid payouts reserve part of the cash balance."""
    db.query(User).filter(User.id == payout.partner_id).with_for_update().first()

    reserved = (
        db.query(func.coalesce(func.sum(PayoutRequest.amount), 0))
        .filter(
            PayoutRequest.partner_id == payout.partner_id,
            PayoutRequest.status == "approved",
            PayoutRequest.id != payout.id,
        )
        .scalar()
    )
    available = get_cash_balance(db, payout.partner_id) - int(reserved or 0)
    if payout.amount > available:
        logger.info(
            "payout transition refused: insufficient balance",
            extra={"payout_id": payout.id, "amount": payout.amount, "available": available},
        )
        raise InsufficientBalanceError("Insufficient balance")


def update_payout_status(db: Session, payout_id, status: str) -> PayoutRequest:
    payout = db.query(PayoutRequest).filter(PayoutRequest.id == payout_id).with_for_update().first()
    if not payout:
        raise NotFoundError("Payout request not found")

    if status not in PAYOUT_TRANSITIONS.get(payout.status, set()):
        raise InvalidArgumentError(f"Cannot move payout from {payout.status} to {status}")

    if status in {"approved", "completed"}:
        _ensure_covered(db, payout)

    previous = payout.status
    payout.status = status
    if payout.processed_at is None:
        payout.processed_at = utcnow()

    db.flush()

    logger.info(
        "payout status changed",
        extra={"payout_id": payout.id, "from": previous, "to": status},
    )
    return payout
