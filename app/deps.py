from fastapi import Depends
from sqlalchemy.orm import Session

from infrastructure.database import get_db
from infrastructure.adapters.repository.sql_repository import (
    SqlRegistrationRepository,
    SqlTrainingRepository,
    SqlTrainingTeamRepository,
    SqlUserRepository,
)
from infrastructure.adapters.repository.sql_unit_of_work import SqlUnitOfWork

from domain.services.training_team_service import TrainingTeamService


def get_training_team_service(db: Session = Depends(get_db)) -> TrainingTeamService:
    return TrainingTeamService(
        trainings=SqlTrainingRepository(db),
        registrations=SqlRegistrationRepository(db),
        users=SqlUserRepository(db),
        teams=SqlTrainingTeamRepository(db),
        unit_of_work=SqlUnitOfWork(db),
    )
