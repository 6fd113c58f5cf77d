from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional
from uuid import UUID

from domain.exceptions import (
    InsufficientParticipants,
    RegenerationDeadlineExceeded,
    TeamPersistenceError,
    TrainingNotFound,
)
from domain.models.participant import ParticipantWithLevel, UserWithSkillsAndAttributes
from domain.models.team_size import TeamSize
from domain.models.training import TeamMemberReadModel, TrainingTeam, TrainingTeamReadModel
from domain.ports.repository import (
    RegistrationRepositoryPort,
    TrainingRepositoryPort,
    TrainingTeamRepositoryPort,
    UserRepositoryPort,
)
from domain.ports.unit_of_work import UnitOfWorkPort
from domain.services.player_level import calculate_player_level
from domain.services.team_generation_service import TeamGenerationService


class _Deadline:
    def __init__(self, training_id: UUID, timeout: Optional[float]):
        self.training_id = training_id
        self.timeout = timeout
        self.expires_at = time.monotonic() + timeout if timeout is not None else None

    def check(self) -> None:
        if self.expires_at is not None and time.monotonic() >= self.expires_at:
            raise RegenerationDeadlineExceeded(self.training_id, self.timeout)


class TrainingTeamService:
    def __init__(
        self,
        trainings: TrainingRepositoryPort,
        registrations: RegistrationRepositoryPort,
        users: UserRepositoryPort,
        teams: TrainingTeamRepositoryPort,
        unit_of_work: UnitOfWorkPort,
        generator: Optional[TeamGenerationService] = None,
    ):
        self.trainings = trainings
        self.registrations = registrations
        self.users = users
        self.teams = teams
        self.unit_of_work = unit_of_work
        self.generator = generator or TeamGenerationService()
        self.logger = logging.getLogger(__name__)

    def regenerate_teams(self, training_id: UUID, timeout: Optional[float] = None) -> List[UUID]:
        """
        Rebuild every team of a training from its confirmed registrations.

        Everything up to the partitioning is read-only. The old teams are
        deleted and the new ones inserted in a single transaction, so a failure
        (or an expired timeout) leaves the previous teams untouched.
        """
        deadline = _Deadline(training_id, timeout)

        if self.trainings.get_training_by_id(training_id) is None:
            raise TrainingNotFound(training_id)

        registrations = self.registrations.find_confirmed(training_id)
        if not registrations:
            self.logger.warning(f"No confirmed participant for training {training_id}")
            raise InsufficientParticipants(0, TeamSize.MIN, training_id)

        user_ids = list(dict.fromkeys(reg.user_id for reg in registrations))
        participants = self._load_participants(user_ids)
        deadline.check()

        new_teams = self.generator.generate_teams(training_id, participants)

        def replace_teams(tx) -> List[TrainingTeam]:
            self.teams.lock_training(training_id, tx)
            self.teams.delete_all_for_training(training_id, tx)
            created = self.teams.create_many(new_teams, tx)
            deadline.check()
            return created

        try:
            created = self.unit_of_work.run_in_transaction(replace_teams)
        except TeamPersistenceError as e:
            self.logger.error(f"Team regeneration failed for training {training_id}, previous teams kept")
            raise TeamPersistenceError(training_id) from e.__cause__

        self.logger.info(
            f"Generated {len(created)} teams for training {training_id} "
            f"({len(participants)} participants)"
        )
        return [team.id for team in created]

    def list_teams(self, training_id: UUID) -> List[TrainingTeamReadModel]:
        if self.trainings.get_training_by_id(training_id) is None:
            raise TrainingNotFound(training_id)

        if not self.teams.exists_for_training(training_id):
            return []

        teams = self.teams.find_by_training_id(training_id)
        member_ids = list(dict.fromkeys(uid for team in teams for uid in team.member_ids))

        members: Dict[UUID, TeamMemberReadModel] = {}
        for user in self.users.find_many_with_full_profile(member_ids):
            members[user.id] = TeamMemberReadModel(
                user_id=user.id,
                first_name=user.first_name,
                last_name=user.last_name,
                avatar=user.avatar,
                gender=user.gender.value if user.gender else None,
                level=calculate_player_level(user.skills, user.attributes),
            )

        # members whose account disappeared since generation are skipped
        return [
            TrainingTeamReadModel(
                id=team.id,
                training_id=team.training_id,
                name=team.name,
                average_level=team.average_level,
                created_at=team.created_at,
                members=[members[uid] for uid in team.member_ids if uid in members],
            )
            for team in teams
        ]

    def _load_participants(self, user_ids: List[UUID]) -> List[ParticipantWithLevel]:
        users = {u.id: u for u in self.users.find_many_with_skills_and_attributes(user_ids)}

        missing = [uid for uid in user_ids if uid not in users]
        if missing:
            self.logger.warning(f"{len(missing)} participants have no profile, default level used")

        participants = []
        for uid in user_ids:
            user = users.get(uid) or UserWithSkillsAndAttributes(id=uid)
            participants.append(
                ParticipantWithLevel(
                    user_id=uid,
                    gender=user.gender,
                    level=calculate_player_level(user.skills, user.attributes),
                )
            )
        return participants
