"""Posting line parsing."""

import re
import logging
from typing import Optional
from .base import BaseParser, ParseResult
from .amount_parser import AmountParser
from ..models import Account, Posting

logger = logging.getLogger(__name__)


class PostingParser(BaseParser):
    """Parses ``<indent>Account:Path<2+ spaces>[amount]`` on a single line."""

    rule_name = "posting"

    def __init__(self, amount_parser: Optional[AmountParser] = None):
        super().__init__()
        self.amount_parser = amount_parser or AmountParser()

        # The account ends at the first space followed by more spaces or tabs,
        # so single spaces inside an account name are allowed.
        self.account_pattern = re.compile(
            r'[ \t]*(?P<account>[^ \t\r\n][^\r\n]*?)(?P<separator> [ \t]+)'
        )

    def parse(self, text: str) -> ParseResult:
        """
        Parse one posting line.

        Args:
            text: Input slice positioned at the start of the line

        Returns:
            ParseResult with a Posting value; the amount is None for an
            elided posting

        Raises:
            TokenMismatch: If no two-space separator follows the account
        """
        match = self._expect(self.account_pattern, text, "account followed by two spaces")
        rest = text[match.end():]

        amount = self.amount_parser.optional(rest)
        if amount is not None:
            rest = amount.remainder

        result = ParseResult(
            value=Posting(
                account=Account(match.group('account')),
                amount=amount.value if amount else None,
            ),
            remainder=rest,
            source_text=text[:len(text) - len(rest)],
        )
        self._log_result(result)
        return result
