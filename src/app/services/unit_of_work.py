"""Unit of Work Interface

Groups repository writes into a single atomic commit.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Transaction boundary for use cases

    Repositories flush their changes; only the unit of work commits.
    A failed use case rolls back so no partial writes become visible.
    """

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
