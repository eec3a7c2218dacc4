"""Currency amount parsing with either token order."""

import re
import logging
from typing import Callable, List, Optional, Tuple
from .base import BaseParser, ParseResult, TokenMismatch, skip_spaces
from .numeric_lexer import NumericLiteralLexer, to_decimal
from ..models import CurrencyAmount

logger = logging.getLogger(__name__)


class AmountParser(BaseParser):
    """Parses a currency symbol and a number in any of four orderings."""

    rule_name = "amount"

    def __init__(self, numeric_lexer: Optional[NumericLiteralLexer] = None):
        super().__init__()
        self.numeric_lexer = numeric_lexer or NumericLiteralLexer()
        self.currency_pattern = re.compile(r'[A-Za-z]+')
        self.digits_pattern = re.compile(r'[0-9]+')

        # Orderings in priority order: (name, first token, second token).
        # Float literals are tried before plain digits so "20.00" is never cut at the dot.
        self.orderings: List[Tuple[str, Callable, Callable]] = [
            ('currency_float', self._currency, self._float),
            ('currency_digits', self._currency, self._digits),
            ('float_currency', self._float, self._currency),
            ('digits_currency', self._digits, self._currency),
        ]

    def parse(self, text: str) -> ParseResult:
        """
        Parse an amount such as ``USD 20``, ``20.00 USD``, ``USD20.00`` or ``20USD``.

        Args:
            text: Input slice

        Returns:
            ParseResult with a CurrencyAmount value

        Raises:
            TokenMismatch: If no ordering matches
            NumericConversionFailure: If a matched number cannot become a Decimal
        """
        for ordering, first_rule, second_rule in self.orderings:
            try:
                first = first_rule(text)
                second = second_rule(skip_spaces(first.remainder))
            except TokenMismatch:
                continue

            if first.metadata['token'] == 'currency':
                currency, number = first, second
            else:
                number, currency = first, second

            value = to_decimal(number.value, number.remainder)
            result = ParseResult(
                value=CurrencyAmount(currency=currency.value, value=value),
                remainder=second.remainder,
                source_text=text[:len(text) - len(second.remainder)],
                metadata={'ordering': ordering},
            )
            self._log_result(result)
            return result

        raise TokenMismatch("expected currency amount", self.rule_name, text)

    def _currency(self, text: str) -> ParseResult:
        match = self._expect(self.currency_pattern, text, "currency symbol")
        return ParseResult(value=match.group(), remainder=text[match.end():],
                           metadata={'token': 'currency'})

    def _float(self, text: str) -> ParseResult:
        literal = self.numeric_lexer.parse(text)
        return ParseResult(value=literal.value, remainder=literal.remainder,
                           metadata={'token': 'number'})

    def _digits(self, text: str) -> ParseResult:
        match = self._expect(self.digits_pattern, text, "digits")
        return ParseResult(value=match.group(), remainder=text[match.end():],
                           metadata={'token': 'number'})
