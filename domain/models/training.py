from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple
from uuid import UUID

from domain.models.team_size import TeamSize


@dataclass(frozen=True)
class TrainingSession:
    id: UUID
    title: str
    scheduled_at: Optional[datetime] = None


class RegistrationStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    WAITLISTED = "WAITLISTED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class Registration:
    id: UUID
    training_id: UUID
    user_id: UUID
    status: RegistrationStatus
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TrainingTeam:
    id: UUID
    training_id: UUID
    name: str
    member_ids: Tuple[UUID, ...]
    average_level: float
    created_at: datetime

    @property
    def size(self) -> int:
        return len(self.member_ids)

    def is_empty(self) -> bool:
        return TeamSize.is_empty(self.size)

    def is_full(self) -> bool:
        return TeamSize.is_full(self.size)

    def can_add_member(self) -> bool:
        return TeamSize.can_add_member(self.size)

    def is_valid_size(self) -> bool:
        return TeamSize.is_valid(self.size)

    def has_member(self, user_id: UUID) -> bool:
        return user_id in self.member_ids


# Read models returned by the team listing

@dataclass(frozen=True)
class TeamMemberReadModel:
    user_id: UUID
    first_name: str
    last_name: str
    avatar: Optional[str]
    gender: Optional[str]
    level: float


@dataclass(frozen=True)
class TrainingTeamReadModel:
    id: UUID
    training_id: UUID
    name: str
    average_level: float
    created_at: datetime
    members: List[TeamMemberReadModel] = field(default_factory=list)
