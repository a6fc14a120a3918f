"""
services/transaction_log.py
---------------------------
Append/delete-only log of transactions, kept in creation order.
"""

import uuid
from datetime import date, datetime
from typing import Callable, Iterable, Iterator, Optional

from models.transaction import Transaction, parse_date, parse_type
from utils.logger import get_logger

logger = get_logger(__name__)


class TransactionLog:
    """
    Ordered collection of immutable transactions.

    Records are never edited in place: they are appended with a fresh id
    and creation instant, and later deleted by id.
    """

    def __init__(self, transactions: Iterable[Transaction] = (),
                 clock: Callable[[], datetime] = datetime.now):
        self._transactions: list[Transaction] = list(transactions)
        self._clock = clock

    def _new_id(self) -> str:
        existing = {t.id for t in self._transactions}
        tx_id = uuid.uuid4().hex[:8]
        while tx_id in existing:
            tx_id = uuid.uuid4().hex[:8]
        return tx_id

    def append(self, type: str, amount: float, category: str,
               description: str = "", on: Optional[date] = None) -> Transaction:
        """
        Create and append a transaction.

        Args:
            type: 'income' or 'expense'.
            amount: Pre-validated non-negative amount.
            category: Category label.
            description: Optional note.
            on: Transaction date (date or ISO string); defaults to today.

        Raises:
            InvalidInputError: On an unknown type or malformed date.
        """
        now = self._clock()
        transaction = Transaction(
            id=self._new_id(),
            type=parse_type(type),
            amount=amount,
            category=category,
            description=description,
            date=parse_date(on) if on is not None else now.date(),
            created_at=now,
        )
        self._transactions.append(transaction)
        logger.info(f"Appended {transaction.type} #{transaction.id} ({transaction.amount:.2f}, {category})")
        return transaction

    def delete(self, transaction_id: str) -> bool:
        """Remove a transaction by id; unknown ids are a no-op."""
        before = len(self._transactions)
        self._transactions = [t for t in self._transactions if t.id != transaction_id]
        deleted = len(self._transactions) != before
        if deleted:
            logger.info(f"Deleted transaction #{transaction_id}")
        return deleted

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == transaction_id), None)

    def snapshot(self) -> tuple[Transaction, ...]:
        """Immutable view used for one computation."""
        return tuple(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._transactions)
