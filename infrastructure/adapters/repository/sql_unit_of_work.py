from __future__ import annotations

import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.exceptions import TeamPersistenceError
from domain.ports.unit_of_work import UnitOfWorkPort

T = TypeVar("T")


class SqlUnitOfWork(UnitOfWorkPort):
    """
    Runs work(tx) on the request session and commits once.

    The session may already hold an implicit transaction opened by earlier
    reads, it is committed or rolled back together with the writes.
    """

    def __init__(self, session: Session):
        self.session = session
        self.logger = logging.getLogger(__name__)

    def run_in_transaction(self, work: Callable[[Session], T]) -> T:
        try:
            result = work(self.session)
            self.session.commit()
            return result
        except SQLAlchemyError as e:
            self.session.rollback()
            self.logger.error(f"Transaction rolled back: {e}")
            raise TeamPersistenceError() from e
        except Exception:
            self.session.rollback()
            raise
