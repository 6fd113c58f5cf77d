from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence
from uuid import UUID

from domain.models.participant import UserWithSkillsAndAttributes, UserWithFullProfile
from domain.models.training import TrainingSession, Registration, TrainingTeam


# =========================
# Trainings
# =========================

class TrainingRepositoryPort(ABC):
    @abstractmethod
    def get_training_by_id(self, training_id: UUID) -> Optional[TrainingSession]:
        pass


# =========================
# Registrations
# =========================

class RegistrationRepositoryPort(ABC):
    @abstractmethod
    def find_confirmed(self, training_id: UUID) -> List[Registration]:
        """Only CONFIRMED registrations, waitlisted and cancelled ones are excluded."""
        pass


# =========================
# Users
# =========================

class UserRepositoryPort(ABC):
    @abstractmethod
    def find_many_with_skills_and_attributes(
        self, user_ids: Sequence[UUID]
    ) -> List[UserWithSkillsAndAttributes]:
        pass

    @abstractmethod
    def find_many_with_full_profile(self, user_ids: Sequence[UUID]) -> List[UserWithFullProfile]:
        pass


# =========================
# Training teams
# =========================

class TrainingTeamRepositoryPort(ABC):
    """
    Write methods take the transaction handle handed out by
    UnitOfWorkPort.run_in_transaction so delete and insert share one commit.
    """

    @abstractmethod
    def lock_training(self, training_id: UUID, tx: Any) -> None:
        pass

    @abstractmethod
    def delete_all_for_training(self, training_id: UUID, tx: Any) -> None:
        pass

    @abstractmethod
    def create_many(self, teams: Sequence[TrainingTeam], tx: Any) -> List[TrainingTeam]:
        pass

    @abstractmethod
    def find_by_training_id(self, training_id: UUID) -> List[TrainingTeam]:
        pass

    @abstractmethod
    def exists_for_training(self, training_id: UUID) -> bool:
        pass
