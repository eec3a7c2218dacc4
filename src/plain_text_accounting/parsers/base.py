"""Base classes and error types for ledger grammar parsers."""

import re
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Horizontal whitespace only; line breaks separate postings.
SPACES = re.compile(r'[ \t]*')
LINE_ENDING = re.compile(r'\r?\n')


class ParseError(Exception):
    """Base exception for all grammar failures."""

    def __init__(self, message: str, rule: str, remainder: str,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize parse error.

        Args:
            message: Human readable description
            rule: Name of the rule that failed
            remainder: Input left unconsumed at the point of failure
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.rule = rule
        self.remainder = remainder
        self.details = details or {}

    def __str__(self):
        snippet = self.remainder[:30]
        if len(self.remainder) > 30:
            snippet += "..."
        return f"{self.rule}: {self.message} at {snippet!r}"


class TokenMismatch(ParseError):
    """Raised when an expected literal or character class is not found."""
    pass


class NumericConversionFailure(ParseError):
    """Raised when a numeric span cannot be converted to a Decimal."""
    pass


class InvalidCalendarDate(ParseError):
    """Raised when well-formed date digits do not form a real date."""
    pass


@dataclass(frozen=True)
class ParseResult:
    """Result of a successful parse: the value and the unconsumed input."""
    value: Any
    remainder: str
    source_text: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)


class BaseParser(ABC):
    """Base class for all grammar rules."""

    rule_name = "base"

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def parse(self, text: str) -> ParseResult:
        """
        Parse a prefix of the input.

        Args:
            text: Input slice starting at the current position

        Returns:
            ParseResult with the parsed value and remaining input

        Raises:
            ParseError: If the rule does not match. Nothing is consumed.
        """
        pass

    def optional(self, text: str) -> Optional[ParseResult]:
        """Run the rule, mapping a TokenMismatch to None. Hard failures propagate."""
        try:
            return self.parse(text)
        except TokenMismatch:
            return None

    def _expect(self, pattern: re.Pattern, text: str, expected: str) -> re.Match:
        """Match a compiled pattern at the start of text or raise TokenMismatch."""
        match = pattern.match(text)
        if match is None:
            raise TokenMismatch(f"expected {expected}", self.rule_name, text)
        return match

    def _log_result(self, result: ParseResult):
        """Log parsing result for debugging."""
        self.logger.debug(f"Parsed {self.rule_name}: {result.value!r} "
                          f"(remaining {len(result.remainder)} chars)")


def skip_spaces(text: str) -> str:
    """Drop leading spaces and tabs."""
    return text[SPACES.match(text).end():]
