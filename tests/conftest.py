import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workbooster.db import Base, get_db
from workbooster.main import app
from workbooster.models.pipeline import LeadStage, LeadStatus
from workbooster.models.users import User
from workbooster.utils.password import hash_password

STAGES = [
    (1, "New Lead"),
    (2, "Data Enrichment"),
    (3, "Product Qualification"),
    (4, "Telecalling"),
    (5, "Initial Connect"),
    (6, "Demo"),
    (7, "Discovery"),
    (8, "POC"),
    (9, "Proposal & Commercials"),
    (10, "Pilot"),
    (11, "Closed Won"),
    (12, "Signing Off"),
    (13, "Closed Lost"),
]

# status ids: stage n gets 2n-1 and 2n
STATUSES = []
for stage_id, stage_name in STAGES:
    STATUSES.append((stage_id * 2 - 1, f"{stage_name} Open", stage_id))
    STATUSES.append((stage_id * 2, f"{stage_name} Done", stage_id))

ADMIN_PASSWORD = "admin-pass"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    for stage_id, stage_name in STAGES:
        session.add(LeadStage(stage_id=stage_id, stage_name=stage_name))
    for status_id, status_name, stage_id in STATUSES:
        session.add(LeadStatus(status_id=status_id, status_name=status_name, stage_id=stage_id))
    session.add(User(user_id=1, full_name="Asha Admin", email="admin@example.com",
                     password=hash_password(ADMIN_PASSWORD), role="Admin", status="Active"))
    session.add(User(user_id=2, full_name="Tara Telecaller", email="tara@example.com",
                     password=hash_password("tara-pass"), role="Telecaller", status="Active"))
    session.commit()
    yield session
    session.close()


@pytest.fixture
def client(engine, db):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    response = client.post("/api/login", json={"email": "admin@example.com", "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def make_lead(client):
    def _make_lead(name, website=None, **extra):
        payload = {"account_name": name, "company_website": website or f"https://{name.lower().replace(' ', '')}.com"}
        payload.update(extra)
        response = client.post("/api/leads", json=payload)
        assert response.status_code == 200, response.text
        return response.json()

    return _make_lead
