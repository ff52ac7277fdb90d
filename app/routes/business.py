from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.auth import require_business
from app.models.user import User
from app.schemas.analytics import DemographicsOut, ResponseCountsOut
from app.schemas.survey import BusinessSurveyOut, SurveyCreate, SurveyOut, SurveyStatusUpdate
from app.services.analytics_service import export_results_csv, get_demographics, get_response_counts
from app.services.survey_service import create_survey, get_owned_survey, list_business_surveys, set_survey_status


router = APIRouter(prefix="/api/business", tags=["business"])


@router.get("/surveys", response_model=list[BusinessSurveyOut])
def read_business_surveys(business: User = Depends(require_business), db: Session = Depends(get_db)):
    return list_business_surveys(db, business.id)


@router.post("/surveys", response_model=SurveyOut, status_code=201)
def create_business_survey(
    payload: SurveyCreate,
    business: User = Depends(require_business),
    db: Session = Depends(get_db),
):
    survey = create_survey(db, business.id, payload)
    db.commit()
    db.refresh(survey)
    return survey


@router.patch("/surveys/{survey_id}/status", response_model=SurveyOut)
def update_survey_status(
    survey_id: int,
    payload: SurveyStatusUpdate,
    business: User = Depends(require_business),
    db: Session = Depends(get_db),
):
    survey = set_survey_status(db, survey_id, business.id, payload.status)
    db.commit()
    db.refresh(survey)
    return survey


@router.get("/surveys/{survey_id}/results/counts", response_model=ResponseCountsOut)
def read_response_counts(
    survey_id: int,
    business: User = Depends(require_business),
    db: Session = Depends(get_db),
):
    survey = get_owned_survey(db, survey_id, business.id)
    return get_response_counts(db, survey.id)


@router.get("/surveys/{survey_id}/results/demographics", response_model=DemographicsOut)
def read_demographics(
    survey_id: int,
    business: User = Depends(require_business),
    db: Session = Depends(get_db),
):
    survey = get_owned_survey(db, survey_id, business.id)
    return get_demographics(db, survey.id)


@router.get("/surveys/{survey_id}/results/export")
def export_results(
    survey_id: int,
    business: User = Depends(require_business),
    db: Session = Depends(get_db),
):
    survey = get_owned_survey(db, survey_id, business.id)
    return Response(
        content=export_results_csv(db, survey.id),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="survey_{survey.id}_results.csv"'},
    )
