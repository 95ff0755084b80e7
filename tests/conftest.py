"""
Test configuration for Matchmaking API tests.

This module provides database fixtures, a FastAPI test client and factories
for applicants, questions and answers.
"""
# Set test environment variables BEFORE any imports that might use them
import os
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_matchmaking.db")
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com")
os.environ.setdefault("ENABLE_ADMIN_ROUTES", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from pathlib import Path
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.main import app
from app.database.connection import get_db
from app.database.models import (
    Base, Applicant, ApplicationStatus, ScreeningStatus, QuestionnaireQuestion,
    QuestionnaireAnswer, Event, EventInvitation, Match
)

TEST_DB_PATH = Path("test_matchmaking.db")
ADMIN_EMAIL = "admin@example.com"

@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Remove the SQLite test database after the session."""
    yield

    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()

# Database fixtures
@pytest.fixture(scope="session")
def test_db_engine():
    """Create test database engine."""
    engine = create_engine(f"sqlite:///./{TEST_DB_PATH}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture
def db_session(test_db_engine):
    """Create test database session on a clean schema."""
    Base.metadata.drop_all(bind=test_db_engine)
    Base.metadata.create_all(bind=test_db_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)
    session = TestingSessionLocal()
    try:
        yield session
        session.rollback()
    finally:
        session.close()

# FastAPI client fixture
@pytest.fixture
def client(db_session):
    """Create FastAPI test client with database dependency override."""
    client = TestClient(app)
    client.app.dependency_overrides[get_db] = lambda: db_session
    yield client
    client.app.dependency_overrides.clear()

@pytest.fixture
def admin_headers():
    return {"X-User-Email": ADMIN_EMAIL}

# Factories
@pytest.fixture
def make_applicant(db_session):
    """Create an approved, screened applicant; override any column with kwargs."""
    counter = {"n": 0}

    def _make(**kwargs):
        counter["n"] += 1
        values = {
            "first_name": f"Applicant{counter['n']}",
            "last_name": "Test",
            "email": f"applicant{counter['n']}@example.com",
            "gender": "WOMAN",
            "seeking": "MAN",
            "application_status": ApplicationStatus.APPROVED,
            "screening_status": ScreeningStatus.PASSED,
        }
        values.update(kwargs)
        applicant = Applicant(**values)
        db_session.add(applicant)
        db_session.commit()
        db_session.refresh(applicant)
        return applicant

    return _make

@pytest.fixture
def make_question(db_session):
    """Create an active questionnaire question."""
    counter = {"n": 0}

    def _make(question_type="DROPDOWN", options=None, weight=1.0, is_dealbreaker=False, **kwargs):
        counter["n"] += 1
        question = QuestionnaireQuestion(
            prompt=kwargs.pop("prompt", f"Question {counter['n']}"),
            type=question_type,
            options=options,
            ml_weight=weight,
            is_dealbreaker=is_dealbreaker,
            order=kwargs.pop("order", counter["n"]),
            **kwargs
        )
        db_session.add(question)
        db_session.commit()
        db_session.refresh(question)
        return question

    return _make

@pytest.fixture
def answer(db_session):
    """Record an applicant's answer to a question."""
    def _answer(question, applicant, value):
        row = QuestionnaireAnswer(question_id=question.id, applicant_id=applicant.id, value=value)
        db_session.add(row)
        db_session.commit()
        return row

    return _answer

@pytest.fixture
def make_event(db_session):
    """Create an event and invite the given applicants."""
    def _make(name="Spring Mixer", invitees=()):
        event = Event(name=name)
        db_session.add(event)
        db_session.flush()
        for applicant in invitees:
            db_session.add(EventInvitation(event_id=event.id, applicant_id=applicant.id))
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make

@pytest.fixture
def make_match(db_session):
    def _make(applicant, partner, event=None, score=None):
        match = Match(
            applicant_id=applicant.id,
            partner_id=partner.id,
            event_id=event.id if event else None,
            compatibility_score=score,
        )
        db_session.add(match)
        db_session.commit()
        db_session.refresh(match)
        return match

    return _make

@pytest.fixture
def couple(make_applicant):
    """A woman seeking a man and a man seeking a woman."""
    alice = make_applicant(first_name="Alice", gender="WOMAN", seeking="MAN")
    bob = make_applicant(first_name="Bob", gender="MAN", seeking="WOMAN")
    return alice, bob
