"""
Shared fixtures: in-memory fakes of the domain ports and a SQLite-backed
SQLAlchemy session for the adapter tests.
"""
from __future__ import annotations

import os
import uuid
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence
from uuid import UUID

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from domain.models.participant import (
    Gender,
    ParticipantWithLevel,
    PlayerAttribute,
    PlayerSkill,
    UserWithFullProfile,
    UserWithSkillsAndAttributes,
)
from domain.models.training import Registration, RegistrationStatus, TrainingSession, TrainingTeam
from domain.ports.repository import (
    RegistrationRepositoryPort,
    TrainingRepositoryPort,
    TrainingTeamRepositoryPort,
    UserRepositoryPort,
)
from domain.ports.unit_of_work import UnitOfWorkPort
from infrastructure.persistence.tables import (
    Base,
    TrainingRegistrationTable,
    TrainingTable,
    UserAttributeTable,
    UserSkillTable,
    UserTable,
)

# the app module builds its engine at import time, keep it off postgres
os.environ.setdefault("DATABASE_URL", "sqlite://")


def make_participant(label: str, gender: Optional[str], level: float) -> ParticipantWithLevel:
    # deterministic ids so tests can map a team member back to its label
    return ParticipantWithLevel(
        user_id=uuid.uuid5(uuid.NAMESPACE_OID, label),
        gender=Gender.from_value(gender),
        level=level,
    )


# =========================
# In-memory ports
# =========================

class InMemoryTrainingRepository(TrainingRepositoryPort):
    def __init__(self):
        self.trainings: Dict[UUID, TrainingSession] = {}

    def get_training_by_id(self, training_id: UUID) -> Optional[TrainingSession]:
        return self.trainings.get(training_id)


class InMemoryRegistrationRepository(RegistrationRepositoryPort):
    def __init__(self):
        self.registrations: List[Registration] = []

    def find_confirmed(self, training_id: UUID) -> List[Registration]:
        return [
            r for r in self.registrations
            if r.training_id == training_id and r.status is RegistrationStatus.CONFIRMED
        ]


class InMemoryUserRepository(UserRepositoryPort):
    def __init__(self):
        self.users: Dict[UUID, UserWithFullProfile] = {}
        self.requested: List[List[UUID]] = []

    def find_many_with_skills_and_attributes(self, user_ids: Sequence[UUID]) -> List[UserWithSkillsAndAttributes]:
        self.requested.append(list(user_ids))
        found = [self.users[uid] for uid in user_ids if uid in self.users]
        return [
            UserWithSkillsAndAttributes(id=u.id, gender=u.gender, skills=u.skills, attributes=u.attributes)
            for u in found
        ]

    def find_many_with_full_profile(self, user_ids: Sequence[UUID]) -> List[UserWithFullProfile]:
        return [self.users[uid] for uid in user_ids if uid in self.users]


class InMemoryTeamRepository(TrainingTeamRepositoryPort):
    """Writes go to the transaction's staging copy, reads see committed state only."""

    def __init__(self):
        self.teams: List[TrainingTeam] = []
        self.locked: List[UUID] = []
        self.fail_on_insert = False

    def lock_training(self, training_id: UUID, tx) -> None:
        self.locked.append(training_id)

    def delete_all_for_training(self, training_id: UUID, tx) -> None:
        tx["teams"] = [t for t in tx["teams"] if t.training_id != training_id]

    def create_many(self, teams: Sequence[TrainingTeam], tx) -> List[TrainingTeam]:
        if self.fail_on_insert:
            raise RuntimeError("insert failed")
        tx["teams"] = tx["teams"] + list(teams)
        return list(teams)

    def find_by_training_id(self, training_id: UUID) -> List[TrainingTeam]:
        return [t for t in self.teams if t.training_id == training_id]

    def exists_for_training(self, training_id: UUID) -> bool:
        return bool(self.find_by_training_id(training_id))


class InMemoryUnitOfWork(UnitOfWorkPort):
    def __init__(self, team_repository: InMemoryTeamRepository):
        self.team_repository = team_repository
        self.commits = 0
        self.rollbacks = 0

    def run_in_transaction(self, work):
        tx = {"teams": list(self.team_repository.teams)}
        try:
            result = work(tx)
        except Exception:
            self.rollbacks += 1
            raise
        self.team_repository.teams = tx["teams"]
        self.commits += 1
        return result


class InMemoryBackend:
    def __init__(self):
        self.trainings = InMemoryTrainingRepository()
        self.registrations = InMemoryRegistrationRepository()
        self.users = InMemoryUserRepository()
        self.teams = InMemoryTeamRepository()
        self.unit_of_work = InMemoryUnitOfWork(self.teams)

    def add_training(self, title: str = "Tuesday training") -> UUID:
        training_id = uuid.uuid4()
        self.trainings.trainings[training_id] = TrainingSession(id=training_id, title=title)
        return training_id

    def add_user(
        self,
        gender: Optional[str] = None,
        skill_levels: Sequence[float] = (),
        fitness: Optional[float] = None,
        leadership: Optional[float] = None,
        first_name: str = "Player",
    ) -> UUID:
        user_id = uuid.uuid4()
        attributes = []
        if fitness is not None:
            attributes.append(PlayerAttribute(attribute="FITNESS", value=fitness))
        if leadership is not None:
            attributes.append(PlayerAttribute(attribute="LEADERSHIP", value=leadership))
        self.users.users[user_id] = UserWithFullProfile(
            id=user_id,
            first_name=first_name,
            last_name=str(user_id)[:8],
            gender=Gender.from_value(gender),
            skills=[PlayerSkill(level=level) for level in skill_levels],
            attributes=attributes,
        )
        return user_id

    def register(self, training_id: UUID, user_id: UUID, status: RegistrationStatus = RegistrationStatus.CONFIRMED):
        self.registrations.registrations.append(
            Registration(id=uuid.uuid4(), training_id=training_id, user_id=user_id, status=status)
        )


@pytest.fixture()
def backend() -> InMemoryBackend:
    return InMemoryBackend()


# =========================
# SQLite
# =========================

@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


class SqlSeeder:
    def __init__(self, session):
        self.session = session
        self._counter = 0

    def training(self, title: str = "Thursday training") -> UUID:
        t = TrainingTable(id=uuid.uuid4(), title=title, scheduled_at=datetime(2026, 10, 20, 19, 0))
        self.session.add(t)
        self.session.commit()
        return t.id

    def user(
        self,
        gender: Optional[str] = None,
        skill_levels: Sequence[float] = (),
        fitness: Optional[float] = None,
        leadership: Optional[float] = None,
    ) -> UUID:
        self._counter += 1
        u = UserTable(
            id=uuid.uuid4(),
            first_name=f"Player{self._counter}",
            last_name="Test",
            email=f"player{self._counter}@club.test",
            gender=gender,
        )
        for index, level in enumerate(skill_levels):
            u.skills.append(UserSkillTable(skill=f"SKILL_{index}", level=level))
        if fitness is not None:
            u.attributes.append(UserAttributeTable(attribute="FITNESS", value=fitness))
        if leadership is not None:
            u.attributes.append(UserAttributeTable(attribute="LEADERSHIP", value=leadership))
        self.session.add(u)
        self.session.commit()
        return u.id

    def register(self, training_id: UUID, user_id: UUID, status: str = "CONFIRMED") -> None:
        self._counter += 1
        self.session.add(
            TrainingRegistrationTable(
                training_id=training_id,
                user_id=user_id,
                status=status,
                created_at=datetime(2026, 10, 1) + timedelta(seconds=self._counter),
            )
        )
        self.session.commit()


@pytest.fixture()
def seed(db) -> SqlSeeder:
    return SqlSeeder(db)
