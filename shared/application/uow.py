"""
Unit of Work Pattern

Scopes a group of storage writes into one transaction: either every write
inside the block is committed, or none of them is.
"""

from abc import ABC, abstractmethod
import logging

from django.db import transaction

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    committed: bool = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Wraps ``transaction.atomic`` so the block commits on a clean exit and
    rolls back on any exception, which is re-raised to the caller.

    Usage:
        with DjangoUnitOfWork() as uow:
            reservation_id = store.insert_reservation(reservation)
            store.insert_room_restriction(restriction)
            # Transaction commits here
    """

    def __init__(self, using: str | None = None):
        self._using = using
        self._transaction = None
        self.committed = False

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic(using=self._using)
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)
                self._transaction = None

    def commit(self):
        # The atomic block itself commits on __exit__
        logger.debug("Committing unit of work")
        self.committed = True

    def rollback(self):
        logger.warning("Rolling back unit of work")
        self.committed = False
