"""Top-level transaction grammar composing the header and posting parsers."""

import logging
from typing import List
from .base import BaseParser, ParseResult, TokenMismatch, LINE_ENDING, skip_spaces
from .date_parser import DateParser, AuxiliaryDateParser
from .state_parser import StateParser
from .code_parser import CodeParser
from .description_parser import DescriptionSplitter
from .amount_parser import AmountParser
from .numeric_lexer import NumericLiteralLexer
from .posting_parser import PostingParser
from ..models import Posting, Transaction

logger = logging.getLogger(__name__)


class TransactionParser(BaseParser):
    """
    Parses one transaction block::

        DATE[=AUX_DATE] [STATE] [(CODE)] [MERCHANT | ]MEMO
            ACCOUNT  [AMOUNT]
            ...

    Whitespace between header fields is optional. Postings are read until
    the input ends or a line fails to parse as a posting; that line is left
    in the remainder and the parse still succeeds.
    """

    rule_name = "transaction"

    def __init__(self):
        super().__init__()
        self.date_parser = DateParser()
        self.auxiliary_date_parser = AuxiliaryDateParser(self.date_parser)
        self.state_parser = StateParser()
        self.code_parser = CodeParser()
        self.description_splitter = DescriptionSplitter()
        self.posting_parser = PostingParser(AmountParser(NumericLiteralLexer()))

    def parse(self, text: str) -> ParseResult:
        """
        Parse a transaction from the start of text.

        Args:
            text: One raw transaction block

        Returns:
            ParseResult with a Transaction value and any unconsumed trailing input

        Raises:
            ParseError: If the header does not parse, or a posting line hits
                a hard failure such as an unconvertible amount
        """
        primary = self.date_parser.parse(text)
        rest = primary.remainder

        auxiliary = self.auxiliary_date_parser.optional(rest)
        if auxiliary is not None:
            rest = auxiliary.remainder

        state = self.state_parser.parse(skip_spaces(rest))
        rest = skip_spaces(state.remainder)

        code = self.code_parser.optional(rest)
        if code is not None:
            rest = code.remainder

        description = self.description_splitter.parse(skip_spaces(rest))
        merchant, memo = description.value

        postings, rest = self._parse_postings(description.remainder)

        transaction = Transaction(
            date=primary.value,
            auxiliary_date=auxiliary.value if auxiliary else None,
            state=state.value,
            code=code.value if code else None,
            merchant=merchant,
            memo=memo,
            postings=tuple(postings),
        )

        if rest.strip():
            self.logger.info(f"Stopped after {len(postings)} postings; "
                             f"{len(rest.splitlines())} trailing lines left unparsed")

        result = ParseResult(
            value=transaction,
            remainder=rest,
            source_text=text[:len(text) - len(rest)],
            metadata={'posting_count': len(postings)},
        )
        self._log_result(result)
        return result

    def _parse_postings(self, text: str):
        """Collect postings, each preceded by a line break, until one does not match."""
        postings: List[Posting] = []
        rest = text

        while True:
            line_break = LINE_ENDING.match(rest)
            if line_break is None:
                break
            try:
                posting = self.posting_parser.parse(rest[line_break.end():])
            except TokenMismatch as e:
                self.logger.debug(f"Not a posting line: {e}")
                break
            postings.append(posting.value)
            rest = posting.remainder

        return postings, rest


def parse_transaction(text: str) -> Transaction:
    """Parse a transaction block and return only the Transaction value."""
    return TransactionParser().parse(text).value
