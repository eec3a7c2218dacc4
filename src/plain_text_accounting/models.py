"""Immutable value types produced by the transaction grammar."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class TransactionState(Enum):
    """Clearance state of a transaction."""
    CLEARED = "cleared"
    PENDING = "pending"
    UNCLEARED = "uncleared"


@dataclass(frozen=True)
class CurrencyAmount:
    """A currency symbol paired with an exact decimal value."""
    currency: str
    value: Decimal

    def __post_init__(self):
        if not self.currency or not (self.currency.isascii() and self.currency.isalpha()):
            raise ValueError(f"Currency must be a non-empty alphabetic token, got {self.currency!r}")
        if not isinstance(self.value, Decimal):
            raise TypeError(f"Amount value must be a Decimal, got {type(self.value).__name__}")

    def to_dict(self) -> Dict[str, str]:
        return {'currency': self.currency, 'value': str(self.value)}

    def __str__(self):
        return f"{self.currency} {self.value}"


@dataclass(frozen=True)
class Account:
    """Hierarchical colon-delimited account path, stored verbatim."""
    name: str

    @property
    def segments(self) -> List[str]:
        return self.name.split(':')

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Posting:
    """One account line; an absent amount marks an elided (balancing) posting."""
    account: Account
    amount: Optional[CurrencyAmount] = None

    @property
    def is_elided(self) -> bool:
        return self.amount is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'account': self.account.name,
            'amount': self.amount.to_dict() if self.amount else None,
        }


@dataclass(frozen=True)
class Transaction:
    """A single parsed ledger transaction."""
    date: date
    auxiliary_date: Optional[date]
    state: TransactionState
    code: Optional[str]
    merchant: Optional[str]
    memo: str
    postings: Tuple[Posting, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain JSON/YAML-safe primitives."""
        return {
            'date': self.date.isoformat(),
            'auxiliary_date': self.auxiliary_date.isoformat() if self.auxiliary_date else None,
            'state': self.state.value,
            'code': self.code,
            'merchant': self.merchant,
            'memo': self.memo,
            'postings': [posting.to_dict() for posting in self.postings],
        }
