"""
models/transaction.py
---------------------
Domain model for financial transactions (expenses and income).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from utils.errors import InvalidInputError

EXPENSE = "expense"
INCOME = "income"
TRANSACTION_TYPES = (INCOME, EXPENSE)


def parse_date(value) -> date:
    """
    Coerce an ISO ``YYYY-MM-DD`` string (or a date) to a calendar date.

    Raises:
        InvalidInputError: If the value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Tolerate a full ISO timestamp; only the calendar part matters.
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise InvalidInputError("date", value, "expected an ISO date (YYYY-MM-DD)")


def parse_type(value) -> str:
    """Validate a transaction type string."""
    if isinstance(value, str) and value.strip().lower() in TRANSACTION_TYPES:
        return value.strip().lower()
    raise InvalidInputError("type", value, "expected 'income' or 'expense'")


@dataclass(frozen=True)
class Transaction:
    """
    Represents a single financial transaction.

    Transactions are immutable once created; the log only appends
    and deletes them.

    Attributes:
        id: Short unique identifier assigned by the log.
        type: Either 'expense' or 'income'.
        amount: Non-negative amount in the display currency.
        category: Free-text category label, matched exactly against
            category names.
        description: Human-readable note.
        date: Calendar date of the transaction (no time of day).
        created_at: Instant the record was appended.
    """
    id: str
    type: str  # 'expense' | 'income'
    amount: float
    category: str
    description: str = ""
    date: date = field(default_factory=date.today)
    created_at: Optional[datetime] = None

    def is_expense(self) -> bool:
        """Returns True if this is an expense transaction."""
        return self.type == EXPENSE

    def is_income(self) -> bool:
        """Returns True if this is an income transaction."""
        return self.type == INCOME

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "amount": self.amount,
            "category": self.category,
            "description": self.description,
            "date": self.date.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """
        Build a Transaction from its persisted form.

        Raises:
            InvalidInputError: On a missing required field or a malformed
                date, timestamp or type.
        """
        created_raw = data.get("created_at")
        try:
            created_at = datetime.fromisoformat(created_raw) if created_raw else None
        except (TypeError, ValueError):
            raise InvalidInputError("created_at", created_raw, "expected an ISO timestamp")

        missing = [key for key in ("id", "type", "amount", "date") if key not in data]
        if missing:
            raise InvalidInputError(missing[0], None, "missing required field")

        return cls(
            id=str(data["id"]),
            type=parse_type(data["type"]),
            amount=float(data["amount"]),
            category=data.get("category", ""),
            description=data.get("description") or "",
            date=parse_date(data["date"]),
            created_at=created_at,
        )

    def __str__(self) -> str:
        sign = "-" if self.is_expense() else "+"
        return f"{sign}{self.amount:.2f} | {self.category} | {self.date}"
