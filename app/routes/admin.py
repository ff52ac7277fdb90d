from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.auth import require_admin_key
from app.schemas.payout import PayoutOut, PayoutStatusUpdate
from app.schemas.reward import CouponIssue, RewardOut
from app.services.payout_service import update_payout_status
from app.services.reward_service import issue_coupon


router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin_key)])


@router.patch("/payouts/{payout_id}", response_model=PayoutOut)
def admin_update_payout(payout_id: int, payload: PayoutStatusUpdate, db: Session = Depends(get_db)):
    payout = update_payout_status(db, payout_id, payload.status)
    db.commit()
    db.refresh(payout)
    return payout


@router.post("/partners/{partner_id}/coupons", response_model=RewardOut, status_code=201)
def admin_issue_coupon(partner_id: int, payload: CouponIssue, db: Session = Depends(get_db)):
    coupon = issue_coupon(db, partner_id, payload)
    db.commit()
    db.refresh(coupon)
    return coupon
