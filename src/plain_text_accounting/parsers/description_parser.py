"""Merchant / memo splitting for the rest of a transaction header line."""

import re
from .base import BaseParser, ParseResult

MERCHANT_DELIMITER = ' | '


class DescriptionSplitter(BaseParser):
    """
    Splits header text into an optional merchant and a memo.

    The first `` | `` on the line separates the two. A merchant can therefore
    never contain `` | `` itself; everything after the first delimiter,
    further delimiters included, belongs to the memo.
    """

    rule_name = "description"

    def __init__(self):
        super().__init__()
        self.line_pattern = re.compile(r'[^\r\n]*')

    def parse(self, text: str) -> ParseResult:
        """
        Consume the rest of the current line.

        Args:
            text: Input slice positioned after date, state and code

        Returns:
            ParseResult with a ``(merchant, memo)`` tuple; merchant may be None
            and memo may be empty
        """
        line = self.line_pattern.match(text).group()
        merchant, delimiter, memo = line.partition(MERCHANT_DELIMITER)
        if not delimiter:
            merchant, memo = None, line

        result = ParseResult(
            value=(merchant, memo),
            remainder=text[len(line):],
            source_text=line,
        )
        self._log_result(result)
        return result
