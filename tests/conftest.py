import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from sme_assessment import crud, models  # noqa: E402,F401
from sme_assessment.core import security  # noqa: E402
from sme_assessment.db.base import Base  # noqa: E402
from sme_assessment.db.session import SessionLocal, engine  # noqa: E402
from sme_assessment.main import app  # noqa: E402
from sme_assessment.models.survey import Question, Theme  # noqa: E402
from sme_assessment.schemas.user import UserCreate  # noqa: E402

PASSWORD = "Str0ng!Passw0rd"

PROFILE = {
    "business_name": "Acme Bakery",
    "sector": "Food & Beverage",
    "country": "Kenya",
    "city": "Nairobi",
    "employee_count": 12,
}


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def survey(db):
    """
    Two themes: "Market" (weight 1.0, three questions, the last reverse-scored)
    and "Finance" (weight 2.0, two questions).
    """
    market = Theme(name="Market", description="Market need", order_index=1, weight=1.0)
    finance = Theme(name="Finance", description="Money matters", order_index=2, weight=2.0)
    db.add_all([market, finance])
    db.flush()
    questions = [
        Question(theme_id=market.id, text="We know our customers.", order_index=1),
        Question(theme_id=market.id, text="We track competitors.", order_index=2),
        Question(theme_id=market.id, text="Sales are unpredictable.", order_index=3, reverse_scored=True),
        Question(theme_id=finance.id, text="We keep records.", order_index=1),
        Question(theme_id=finance.id, text="We forecast cash flow.", order_index=2),
    ]
    db.add_all(questions)
    db.commit()
    return {"themes": [market, finance], "questions": questions}


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _make_user(db, email: str, role: str = "user"):
    return crud.user.create(
        db, obj_in=UserCreate(email=email, full_name="Test Owner", password=PASSWORD), role=role
    )


def _auth_headers(user) -> dict:
    token = security.create_access_token(user.id, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(db):
    return _make_user(db, "owner@example.com")


@pytest.fixture
def auth_headers(user):
    return _auth_headers(user)


@pytest.fixture
def other_headers(db):
    return _auth_headers(_make_user(db, "someone.else@example.com"))


@pytest.fixture
def admin_headers(db):
    return _auth_headers(_make_user(db, "admin@example.com", role="admin"))


@pytest.fixture
def profile(client, auth_headers):
    response = client.post("/api/v1/business-profiles/", json=PROFILE, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


def answer_all(client, headers, assessment_id, questions, scores):
    payload = {
        "responses": [
            {"question_id": q.id, "score": s} for q, s in zip(questions, scores)
        ]
    }
    return client.put(f"/api/v1/assessments/{assessment_id}/responses", json=payload, headers=headers)


@pytest.fixture
def completed_assessment(client, auth_headers, profile, survey):
    """Submitted assessment with Market answers 4, 4, 2 (reverse -> 4) and Finance 5, 4."""
    created = client.post("/api/v1/assessments/", headers=auth_headers).json()
    answer_all(client, auth_headers, created["id"], survey["questions"], [4, 4, 2, 5, 4])
    response = client.post(f"/api/v1/assessments/{created['id']}/submit", headers=auth_headers)
    assert response.status_code == 200
    return response.json()
