from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.auth import get_current_user
from app.schemas.survey import SurveyDetailOut
from app.services.survey_service import get_survey_with_questions


router = APIRouter(prefix="/api/surveys", tags=["surveys"])


@router.get("/{survey_id}", response_model=SurveyDetailOut, dependencies=[Depends(get_current_user)])
def read_survey(survey_id: int, db: Session = Depends(get_db)):
    return get_survey_with_questions(db, survey_id)
