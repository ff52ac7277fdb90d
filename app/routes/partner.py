from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.auth import require_partner
from app.models.user import User
from app.schemas.payout import PayoutCreate, PayoutOut
from app.schemas.reward import RewardOut, WalletOut
from app.schemas.survey import AvailableSurveyOut, CompletedSurveyOut
from app.schemas.survey_response import ResponseSubmit
from app.services.eligibility_service import get_available_surveys
from app.services.payout_service import list_payouts, request_payout
from app.services.response_service import submit_response
from app.services.reward_service import list_rewards
from app.services.survey_service import list_completed_surveys
from app.services.wallet_service import get_wallet


router = APIRouter(prefix="/api/partner", tags=["partner"])


@router.get("/surveys", response_model=list[AvailableSurveyOut])
def read_available_surveys(partner: User = Depends(require_partner), db: Session = Depends(get_db)):
    return get_available_surveys(db, partner.id)


@router.get("/surveys/completed", response_model=list[CompletedSurveyOut])
def read_completed_surveys(partner: User = Depends(require_partner), db: Session = Depends(get_db)):
    return list_completed_surveys(db, partner.id)


@router.post("/surveys/{survey_id}/responses", status_code=201)
def create_survey_response(
    survey_id: int,
    payload: ResponseSubmit,
    partner: User = Depends(require_partner),
    db: Session = Depends(get_db),
):
    response = submit_response(db, partner.id, survey_id, payload.answers)
    db.commit()
    return {
        "message": "Survey completed successfully",
        "responseId": response.id,
    }


@router.get("/rewards", response_model=list[RewardOut])
def read_rewards(partner: User = Depends(require_partner), db: Session = Depends(get_db)):
    return list_rewards(db, partner.id)


@router.get("/wallet", response_model=WalletOut)
def read_wallet(partner: User = Depends(require_partner), db: Session = Depends(get_db)):
    return get_wallet(db, partner.id)


@router.get("/payouts", response_model=list[PayoutOut])
def read_payouts(partner: User = Depends(require_partner), db: Session = Depends(get_db)):
    return list_payouts(db, partner.id)


@router.post("/payouts", response_model=PayoutOut, status_code=201)
def create_payout(
    payload: PayoutCreate,
    partner: User = Depends(require_partner),
    db: Session = Depends(get_db),
):
    payout = request_payout(db, partner.id, payload.amount)
    db.commit()
    db.refresh(payout)
    return payout
