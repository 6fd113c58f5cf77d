from __future__ import annotations

from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from domain.models.participant import (
    Gender,
    PlayerAttribute,
    PlayerSkill,
    UserWithFullProfile,
    UserWithSkillsAndAttributes,
)
from domain.models.training import (
    Registration,
    RegistrationStatus,
    TrainingSession,
    TrainingTeam,
)
from domain.ports.repository import (
    RegistrationRepositoryPort,
    TrainingRepositoryPort,
    TrainingTeamRepositoryPort,
    UserRepositoryPort,
)

from infrastructure.persistence.tables import (
    TrainingRegistrationTable,
    TrainingTable,
    TrainingTeamTable,
    UserTable,
)


class SqlTrainingRepository(TrainingRepositoryPort):
    def __init__(self, session: Session):
        self.session = session

    def get_training_by_id(self, training_id: UUID) -> Optional[TrainingSession]:
        t = self.session.get(TrainingTable, training_id)
        if not t:
            return None
        return TrainingSession(id=t.id, title=t.title, scheduled_at=t.scheduled_at)


class SqlRegistrationRepository(RegistrationRepositoryPort):
    def __init__(self, session: Session):
        self.session = session

    def find_confirmed(self, training_id: UUID) -> List[Registration]:
        rows = self.session.scalars(
            select(TrainingRegistrationTable)
            .where(
                TrainingRegistrationTable.training_id == training_id,
                TrainingRegistrationTable.status == RegistrationStatus.CONFIRMED.value,
            )
            .order_by(TrainingRegistrationTable.created_at, TrainingRegistrationTable.id)
        ).all()
        return [
            Registration(
                id=r.id,
                training_id=r.training_id,
                user_id=r.user_id,
                status=RegistrationStatus(r.status),
                created_at=r.created_at,
            )
            for r in rows
        ]


class SqlUserRepository(UserRepositoryPort):
    def __init__(self, session: Session):
        self.session = session

    def find_many_with_skills_and_attributes(
        self, user_ids: Sequence[UUID]
    ) -> List[UserWithSkillsAndAttributes]:
        return [
            UserWithSkillsAndAttributes(
                id=u.id,
                gender=Gender.from_value(u.gender),
                skills=self._skills(u),
                attributes=self._attributes(u),
            )
            for u in self._load_users(user_ids)
        ]

    def find_many_with_full_profile(self, user_ids: Sequence[UUID]) -> List[UserWithFullProfile]:
        return [
            UserWithFullProfile(
                id=u.id,
                first_name=u.first_name,
                last_name=u.last_name,
                avatar=u.avatar,
                gender=Gender.from_value(u.gender),
                skills=self._skills(u),
                attributes=self._attributes(u),
            )
            for u in self._load_users(user_ids)
        ]

    def _load_users(self, user_ids: Sequence[UUID]) -> List[UserTable]:
        if not user_ids:
            return []
        return list(self.session.scalars(select(UserTable).where(UserTable.id.in_(list(user_ids)))).all())

    @staticmethod
    def _skills(user: UserTable) -> List[PlayerSkill]:
        return [PlayerSkill(level=s.level) for s in user.skills]

    @staticmethod
    def _attributes(user: UserTable) -> List[PlayerAttribute]:
        return [PlayerAttribute(attribute=a.attribute, value=a.value) for a in user.attributes]


class SqlTrainingTeamRepository(TrainingTeamRepositoryPort):
    def __init__(self, session: Session):
        self.session = session

    # =========================
    # Transaction-scoped writes
    # =========================

    def lock_training(self, training_id: UUID, tx: Session) -> None:
        # row lock on postgres, silently dropped by sqlite
        tx.execute(
            select(TrainingTable.id).where(TrainingTable.id == training_id).with_for_update()
        )

    def delete_all_for_training(self, training_id: UUID, tx: Session) -> None:
        tx.execute(delete(TrainingTeamTable).where(TrainingTeamTable.training_id == training_id))

    def create_many(self, teams: Sequence[TrainingTeam], tx: Session) -> List[TrainingTeam]:
        tx.add_all(
            [
                TrainingTeamTable(
                    id=team.id,
                    training_id=team.training_id,
                    name=team.name,
                    position=position,
                    member_ids=[str(uid) for uid in team.member_ids],
                    average_level=team.average_level,
                    created_at=team.created_at,
                )
                for position, team in enumerate(teams)
            ]
        )
        tx.flush()
        return list(teams)

    # =========================
    # Reads
    # =========================

    def find_by_training_id(self, training_id: UUID) -> List[TrainingTeam]:
        rows = self.session.scalars(
            select(TrainingTeamTable)
            .where(TrainingTeamTable.training_id == training_id)
            .order_by(TrainingTeamTable.position)
        ).all()
        return [self._map_to_domain(t) for t in rows]

    def exists_for_training(self, training_id: UUID) -> bool:
        row = self.session.scalars(
            select(TrainingTeamTable.id).where(TrainingTeamTable.training_id == training_id).limit(1)
        ).first()
        return row is not None

    def _map_to_domain(self, t: TrainingTeamTable) -> TrainingTeam:
        return TrainingTeam(
            id=t.id,
            training_id=t.training_id,
            name=t.name,
            member_ids=tuple(UUID(uid) for uid in t.member_ids),
            average_level=t.average_level,
            created_at=t.created_at,
        )
