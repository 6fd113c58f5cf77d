from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.core.settings import Settings, get_settings
from app.deps import get_training_team_service
from domain.exceptions import (
    InsufficientParticipants,
    RegenerationDeadlineExceeded,
    TeamPersistenceError,
    TrainingNotFound,
)
from domain.services.training_team_service import TrainingTeamService

router = APIRouter(prefix="/trainings", tags=["training teams"])


class GeneratedTeamsOut(BaseModel):
    team_ids: List[UUID]


class TeamMemberOut(BaseModel):
    user_id: UUID
    first_name: str
    last_name: str
    avatar: Optional[str]
    gender: Optional[str]
    level: float


class TrainingTeamOut(BaseModel):
    id: UUID
    training_id: UUID
    name: str
    average_level: float
    created_at: datetime
    members: List[TeamMemberOut]


@router.post("/{training_id}/teams/generate", response_model=GeneratedTeamsOut, status_code=201)
def generate_teams(
    training_id: UUID,
    service: TrainingTeamService = Depends(get_training_team_service),
    settings: Settings = Depends(get_settings),
):
    try:
        team_ids = service.regenerate_teams(
            training_id, timeout=settings.team_regeneration_timeout_seconds
        )
        return GeneratedTeamsOut(team_ids=team_ids)
    except TrainingNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InsufficientParticipants as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RegenerationDeadlineExceeded as e:
        raise HTTPException(status_code=504, detail=str(e))
    except TeamPersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{training_id}/teams", response_model=List[TrainingTeamOut])
def list_teams(
    training_id: UUID,
    service: TrainingTeamService = Depends(get_training_team_service),
):
    try:
        teams = service.list_teams(training_id)
    except TrainingNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [
        TrainingTeamOut(
            id=t.id,
            training_id=t.training_id,
            name=t.name,
            average_level=t.average_level,
            created_at=t.created_at,
            members=[TeamMemberOut(**m.__dict__) for m in t.members],
        )
        for t in teams
    ]
