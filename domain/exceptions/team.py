from uuid import UUID
from domain.exceptions.base import DomainError


class TeamPersistenceError(DomainError):
    def __init__(self, training_id: UUID | None = None):
        self.training_id = training_id
        msg = "Could not persist generated teams, previous teams were kept"
        if training_id:
            msg += f" (training={training_id})"
        super().__init__(msg)


class RegenerationDeadlineExceeded(DomainError):
    def __init__(self, training_id: UUID, timeout: float):
        self.training_id = training_id
        self.timeout = timeout
        super().__init__(
            f"Team regeneration for training '{training_id}' exceeded {timeout:.2f}s, nothing was applied"
        )
