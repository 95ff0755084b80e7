"""
SQLAlchemy models for the Matchmaking database schema.

These tables are owned by the wider application (intake forms, admin
editors); the scoring service only reads questions and answers and writes
generated matches.
"""
import uuid
from sqlalchemy import (
    Column, String, Text, Integer, Boolean, DateTime, Float, ForeignKey,
    UniqueConstraint, JSON,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in development and tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _uuid() -> str:
    return str(uuid.uuid4())


class ApplicationStatus:
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    WAITLIST = "WAITLIST"


class ScreeningStatus:
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    PASSED = "PASSED"
    FAILED = "FAILED"


class MatchType:
    CURATED = "CURATED"
    MUTUAL = "MUTUAL"


class Applicant(Base):
    """Membership applicant."""
    __tablename__ = "applicants"

    id = Column(String(36), primary_key=True, default=_uuid)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, default="")
    email = Column(String(255), unique=True, nullable=False, index=True)
    gender = Column(String(20), nullable=True)
    seeking = Column(String(20), nullable=True)
    application_status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING, index=True)
    screening_status = Column(String(20), nullable=False, default=ScreeningStatus.PENDING, index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    answers = relationship("QuestionnaireAnswer", back_populates="applicant", cascade="all, delete-orphan")
    event_invitations = relationship("EventInvitation", back_populates="applicant", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return f"<Applicant(id={self.id}, email={self.email}, status={self.application_status})>"


class QuestionnaireQuestion(Base):
    """Questionnaire question with its scoring weight and dealbreaker flag."""
    __tablename__ = "questionnaire_questions"

    id = Column(String(36), primary_key=True, default=_uuid)
    prompt = Column(Text, nullable=False)
    type = Column(String(30), nullable=False, index=True)
    options = Column(JSONType, nullable=True)  # Type-specific configuration blob
    ml_weight = Column(Float, nullable=False, default=1.0)
    is_dealbreaker = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_required = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False, default=0)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    answers = relationship("QuestionnaireAnswer", back_populates="question", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<QuestionnaireQuestion(id={self.id}, type={self.type}, weight={self.ml_weight})>"


class QuestionnaireAnswer(Base):
    """One applicant's answer to one question. A NULL value means unanswered."""
    __tablename__ = "questionnaire_answers"
    __table_args__ = (
        UniqueConstraint("question_id", "applicant_id", name="uq_answer_question_applicant"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    question_id = Column(String(36), ForeignKey("questionnaire_questions.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_id = Column(String(36), ForeignKey("applicants.id", ondelete="CASCADE"), nullable=False, index=True)
    value = Column(JSONType, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    question = relationship("QuestionnaireQuestion", back_populates="answers")
    applicant = relationship("Applicant", back_populates="answers")

    def __repr__(self):
        return f"<QuestionnaireAnswer(question_id={self.question_id}, applicant_id={self.applicant_id})>"


class Event(Base):
    """Matchmaking event that invited applicants attend."""
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    starts_at = Column(DateTime(timezone=True), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    invitations = relationship("EventInvitation", back_populates="event", cascade="all, delete-orphan")
    matches = relationship("Match", back_populates="event", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Event(id={self.id}, name={self.name})>"


class EventInvitation(Base):
    """Invitation of an applicant to an event."""
    __tablename__ = "event_invitations"
    __table_args__ = (
        UniqueConstraint("event_id", "applicant_id", name="uq_invitation_event_applicant"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    applicant_id = Column(String(36), ForeignKey("applicants.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    event = relationship("Event", back_populates="invitations")
    applicant = relationship("Applicant", back_populates="event_invitations")


class Match(Base):
    """Proposed pairing of two applicants, optionally tied to an event."""
    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("event_id", "applicant_id", "partner_id", name="uq_match_event_pair"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=True, index=True)
    applicant_id = Column(String(36), ForeignKey("applicants.id", ondelete="CASCADE"), nullable=False, index=True)
    partner_id = Column(String(36), ForeignKey("applicants.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False, default=MatchType.CURATED)
    compatibility_score = Column(Integer, nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    event = relationship("Event", back_populates="matches")
    applicant = relationship("Applicant", foreign_keys=[applicant_id])
    partner = relationship("Applicant", foreign_keys=[partner_id])

    def __repr__(self):
        return f"<Match(id={self.id}, applicant_id={self.applicant_id}, partner_id={self.partner_id}, score={self.compatibility_score})>"
