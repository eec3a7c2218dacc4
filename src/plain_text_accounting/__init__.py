"""Plain Text Accounting - parse ledger journal transactions into structured records."""

__version__ = "1.0.0"

from .models import Account, CurrencyAmount, Posting, Transaction, TransactionState
from .parsers import (
    ParseError,
    TokenMismatch,
    NumericConversionFailure,
    InvalidCalendarDate,
    TransactionParser,
    parse_transaction,
)

__all__ = [
    'Account',
    'CurrencyAmount',
    'Posting',
    'Transaction',
    'TransactionState',
    'ParseError',
    'TokenMismatch',
    'NumericConversionFailure',
    'InvalidCalendarDate',
    'TransactionParser',
    'parse_transaction',
]
