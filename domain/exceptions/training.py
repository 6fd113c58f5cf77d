from __future__ import annotations

from typing import Optional
from uuid import UUID

from domain.exceptions.base import DomainError


class TrainingNotFound(DomainError):
    def __init__(self, training_id: UUID):
        self.training_id = training_id
        super().__init__(f"Training with id '{training_id}' not found")


class InsufficientParticipants(DomainError):
    def __init__(self, count: int, minimum: int, training_id: Optional[UUID] = None):
        self.count = count
        self.minimum = minimum
        msg = f"Not enough participants to build teams ({count} confirmed, minimum {minimum})"
        if training_id:
            msg += f" (training={training_id})"
        super().__init__(msg)
