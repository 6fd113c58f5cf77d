from sqlalchemy import Column, String, Float, Integer, ForeignKey, DateTime, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base, relationship
import uuid
from datetime import datetime, timezone

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- USERS (read by the team generator) ---

class UserTable(Base):
    __tablename__ = "users"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, unique=True, nullable=False)
    avatar = Column(Text)
    gender = Column(String(16))  # MALE / FEMALE / NULL

    skills = relationship("UserSkillTable", cascade="all, delete-orphan", lazy="selectin")
    attributes = relationship("UserAttributeTable", cascade="all, delete-orphan", lazy="selectin")

class UserSkillTable(Base):
    __tablename__ = "user_skills"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    skill = Column(String, nullable=False)
    level = Column(Float, nullable=False, default=0.0)

class UserAttributeTable(Base):
    __tablename__ = "user_attributes"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    attribute = Column(String, nullable=False)  # FITNESS / LEADERSHIP
    value = Column(Float, nullable=False, default=1.0)


# --- TRAININGS ---

class TrainingTable(Base):
    __tablename__ = "trainings"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    scheduled_at = Column(DateTime)
    created_at = Column(DateTime, default=_utcnow)

class TrainingRegistrationTable(Base):
    __tablename__ = "training_registrations"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    training_id = Column(Uuid(as_uuid=True), ForeignKey("trainings.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(16), nullable=False, default="CONFIRMED")
    created_at = Column(DateTime, default=_utcnow)

class TrainingTeamTable(Base):
    __tablename__ = "training_teams"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    training_id = Column(Uuid(as_uuid=True), ForeignKey("trainings.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    # generation order, names sort badly past "Team 9"
    position = Column(Integer, nullable=False, default=0)
    member_ids = Column(JSON, nullable=False, default=list)
    average_level = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
