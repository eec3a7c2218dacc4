"""Ledger grammar components - one parser per rule, composed top-down."""

from .base import (
    BaseParser,
    ParseResult,
    ParseError,
    TokenMismatch,
    NumericConversionFailure,
    InvalidCalendarDate,
)
from .numeric_lexer import NumericLiteralLexer, to_decimal
from .date_parser import DateParser, AuxiliaryDateParser
from .state_parser import StateParser
from .code_parser import CodeParser
from .description_parser import DescriptionSplitter
from .amount_parser import AmountParser
from .posting_parser import PostingParser
from .transaction_parser import TransactionParser, parse_transaction

__all__ = [
    'BaseParser', 'ParseResult', 'ParseError', 'TokenMismatch',
    'NumericConversionFailure', 'InvalidCalendarDate',
    'NumericLiteralLexer', 'to_decimal', 'DateParser', 'AuxiliaryDateParser',
    'StateParser', 'CodeParser', 'DescriptionSplitter', 'AmountParser',
    'PostingParser', 'TransactionParser', 'parse_transaction',
]
