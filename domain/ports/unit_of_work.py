from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

T = TypeVar("T")


class UnitOfWorkPort(ABC):
    @abstractmethod
    def run_in_transaction(self, work: Callable[[Any], T]) -> T:
        """
        Begin a transaction, call work(tx), commit if it returns.
        Any exception raised by work rolls the transaction back and propagates.
        """
        pass
