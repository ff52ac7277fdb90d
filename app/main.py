import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import DEFAULT_SECRET_KEY, settings
from app.db import engine, Base

from app.models.user import User
from app.models.partner_profile import PartnerProfile
from app.models.business_profile import BusinessProfile
from app.models.user_session import UserSession
from app.models.survey import Survey
from app.models.question import Question
from app.models.survey_response import SurveyResponse
from app.models.answer import Answer
from app.models.reward import Reward
from app.models.payout_request import PayoutRequest

from app.routes.auth import router as auth_router
from app.routes.partner import router as partner_router
from app.routes.business import router as business_router
from app.routes.surveys import router as surveys_router
from app.routes.admin import router as admin_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Survey Marketplace")

# ─── CORS ─────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; session cookies are signed with the development key")
    Base.metadata.create_all(bind=engine)


app.include_router(auth_router)
app.include_router(partner_router)
app.include_router(business_router)
app.include_router(surveys_router)
app.include_router(admin_router)


@app.get("/")
def read_root():
    return {"message": "Survey Marketplace is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="127.0.0.1", port=8001, reload=True)
