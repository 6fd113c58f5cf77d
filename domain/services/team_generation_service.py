from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from domain.exceptions import InsufficientParticipants
from domain.models.participant import ParticipantWithLevel
from domain.models.team_size import TeamSize
from domain.models.training import TrainingTeam

IDEAL_TEAM_SIZE = 5


@dataclass
class _TeamBucket:
    id: UUID
    name: str
    members: List[ParticipantWithLevel] = field(default_factory=list)


class TeamGenerationService:
    """
    Splits a pool of levelled participants into balanced training teams.

    Women are dealt first, then men, both in serpentine order over the teams
    (0, 1, ..., n-1, n-1, ..., 0, 0, 1, ...) after sorting by level. Players
    without a known gender are then added one by one to the smallest team.
    No randomness: same input, same teams (ties keep input order).
    """

    def generate_teams(
        self,
        training_id: UUID,
        participants: List[ParticipantWithLevel],
        created_at: Optional[datetime] = None,
    ) -> List[TrainingTeam]:
        if len(participants) < TeamSize.MIN:
            raise InsufficientParticipants(len(participants), TeamSize.MIN, training_id)

        created_at = created_at or datetime.now(timezone.utc)
        buckets = self._initialize_buckets(self.calculate_team_count(len(participants)))

        females, males, unknown = self._group_by_gender(participants)

        self._distribute_serpentine(buckets, females)
        self._distribute_serpentine(buckets, males)
        self._distribute_to_smallest(buckets, unknown)

        return [self._to_team(training_id, bucket, created_at) for bucket in buckets]

    @staticmethod
    def calculate_team_count(participant_count: int) -> int:
        number_of_teams = math.ceil(participant_count / IDEAL_TEAM_SIZE)
        average_size = participant_count / number_of_teams

        # MAX is not re-checked after this fallback, 7 players give a single team of 7
        if average_size < TeamSize.MIN:
            return participant_count // TeamSize.MIN

        return number_of_teams

    def _initialize_buckets(self, count: int) -> List[_TeamBucket]:
        return [_TeamBucket(id=uuid4(), name=f"Team {index + 1}") for index in range(count)]

    def _group_by_gender(
        self, participants: List[ParticipantWithLevel]
    ) -> Tuple[List[ParticipantWithLevel], List[ParticipantWithLevel], List[ParticipantWithLevel]]:
        females: List[ParticipantWithLevel] = []
        males: List[ParticipantWithLevel] = []
        unknown: List[ParticipantWithLevel] = []

        for participant in participants:
            if not participant.has_gender():
                unknown.append(participant)
            elif participant.is_female():
                females.append(participant)
            else:
                males.append(participant)

        return females, males, unknown

    @staticmethod
    def _sort_by_level_descending(participants: List[ParticipantWithLevel]) -> List[ParticipantWithLevel]:
        # sorted() is stable: equal levels keep their input order
        return sorted(participants, key=lambda p: p.level, reverse=True)

    def _distribute_serpentine(
        self, buckets: List[_TeamBucket], participants: List[ParticipantWithLevel]
    ) -> None:
        if not participants:
            return

        index = 0
        direction = 1

        for participant in self._sort_by_level_descending(participants):
            buckets[index].members.append(participant)

            index += direction
            if index >= len(buckets):
                index = len(buckets) - 1
                direction = -1
            elif index < 0:
                index = 0
                direction = 1

    def _distribute_to_smallest(
        self, buckets: List[_TeamBucket], participants: List[ParticipantWithLevel]
    ) -> None:
        if not participants:
            return

        for participant in self._sort_by_level_descending(participants):
            # min() keeps the first minimum, so ties go to the lowest index
            smallest = min(buckets, key=lambda bucket: len(bucket.members))
            smallest.members.append(participant)

    def _to_team(self, training_id: UUID, bucket: _TeamBucket, created_at: datetime) -> TrainingTeam:
        return TrainingTeam(
            id=bucket.id,
            training_id=training_id,
            name=bucket.name,
            member_ids=tuple(member.user_id for member in bucket.members),
            average_level=self._average_level(bucket.members),
            created_at=created_at,
        )

    @staticmethod
    def _average_level(members: List[ParticipantWithLevel]) -> float:
        if not members:
            return 0.0
        # half-up to the cent: 1.125 -> 1.13
        mean = sum(member.level for member in members) / len(members)
        return math.floor(mean * 100 + 0.5) / 100
