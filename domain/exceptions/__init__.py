from .base import DomainError

from .training import (
    TrainingNotFound,
    InsufficientParticipants,
)

from .team import (
    TeamPersistenceError,
    RegenerationDeadlineExceeded,
)

__all__ = [
    "DomainError",
    "TrainingNotFound",
    "InsufficientParticipants",
    "TeamPersistenceError",
    "RegenerationDeadlineExceeded",
]
