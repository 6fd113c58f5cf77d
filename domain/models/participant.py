from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from uuid import UUID


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional["Gender"]:
        # profiles may hold free text or nothing at all
        if value is None:
            return None
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


class PlayerAttributeType(str, Enum):
    FITNESS = "FITNESS"
    LEADERSHIP = "LEADERSHIP"


@dataclass(frozen=True)
class PlayerSkill:
    level: float


@dataclass(frozen=True)
class PlayerAttribute:
    attribute: str
    value: Optional[float]


@dataclass(frozen=True)
class ParticipantWithLevel:
    user_id: UUID
    gender: Optional[Gender]
    level: float

    def has_gender(self) -> bool:
        return self.gender is not None

    def is_female(self) -> bool:
        return self.gender is Gender.FEMALE

    def is_male(self) -> bool:
        return self.gender is Gender.MALE


@dataclass(frozen=True)
class UserWithSkillsAndAttributes:
    id: UUID
    gender: Optional[Gender] = None
    skills: List[PlayerSkill] = field(default_factory=list)
    attributes: List[PlayerAttribute] = field(default_factory=list)


@dataclass(frozen=True)
class UserWithFullProfile:
    id: UUID
    first_name: str
    last_name: str
    avatar: Optional[str] = None
    gender: Optional[Gender] = None
    skills: List[PlayerSkill] = field(default_factory=list)
    attributes: List[PlayerAttribute] = field(default_factory=list)
