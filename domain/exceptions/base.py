class DomainError(Exception):
    """Base class for training-team domain errors."""
