import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["SECRET_KEY"] = "test-secret"

from datetime import timedelta
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base, get_db
from app.main import app
from app.models.partner_profile import PartnerProfile
from app.models.business_profile import BusinessProfile
from app.models.question import Question
from app.models.survey import Survey
from app.models.user import User
from app.services.auth_service import hash_password
from app.services.clock import utcnow


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

PASSWORD = "secret-pass"
_PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_partner(db: Session):
    def _make(username="partner", age=None, gender=None, location=None, profile=True) -> User:
        user = User(
            email=f"{username}@example.com",
            username=username,
            password=_PASSWORD_HASH,
            role="partner",
        )
        db.add(user)
        db.flush()
        if profile:
            db.add(PartnerProfile(user_id=user.id, age=age, gender=gender, location=location))
        db.commit()
        return user

    return _make


@pytest.fixture
def make_business(db: Session):
    def _make(username="acme") -> User:
        user = User(
            email=f"{username}@example.com",
            username=username,
            password=_PASSWORD_HASH,
            role="business",
        )
        db.add(user)
        db.flush()
        db.add(BusinessProfile(user_id=user.id, company_name=username.title()))
        db.commit()
        return user

    return _make


@pytest.fixture
def make_survey(db: Session):
    def _make(
        business: User,
        title="Coffee habits",
        reward=500,
        max_responses=None,
        expires_at=None,
        status="active",
        questions=("How many cups a day?", "Favourite roast?"),
    ) -> Survey:
        survey = Survey(
            business_id=business.id,
            title=title,
            status=status,
            reward=reward,
            max_responses=max_responses,
            response_count=0,
            expires_at=expires_at,
        )
        db.add(survey)
        db.flush()
        for position, text in enumerate(questions, start=1):
            db.add(Question(survey_id=survey.id, text=text, type="text", order=position))
        db.commit()
        return survey

    return _make


@pytest.fixture
def past():
    return utcnow() - timedelta(hours=1)


@pytest.fixture
def future():
    return utcnow() + timedelta(days=7)


@pytest.fixture
def login(client: TestClient):
    def _login(username: str) -> dict:
        res = client.post("/api/login", json={"username": username, "password": PASSWORD})
        assert res.status_code == 200, res.text
        return res.json()

    return _login
