"""Numeric literal recognition for amounts."""

import re
import logging
from decimal import Decimal, InvalidOperation
from .base import BaseParser, ParseResult, TokenMismatch, NumericConversionFailure

logger = logging.getLogger(__name__)

# A digit may be followed by any number of '_' grouping separators.
DIGIT_RUN = r'(?:[0-9]_*)+'
EXPONENT = r'[eE][+-]?' + DIGIT_RUN


class NumericLiteralLexer(BaseParser):
    """Recognizes float-shaped literals and returns the matched text unevaluated."""

    rule_name = "numeric_literal"

    def __init__(self):
        super().__init__()

        # Literal shapes in priority order
        self.literal_patterns = [
            (re.compile(r'\.' + DIGIT_RUN + r'(?:' + EXPONENT + r')?'), 'leading_dot'),    # .42, .42e3
            (re.compile(DIGIT_RUN + r'(?:\.' + DIGIT_RUN + r')?' + EXPONENT), 'exponent'),  # 42e42, 42.42E42
            (re.compile(DIGIT_RUN + r'\.(?:' + DIGIT_RUN + r')?'), 'fraction'),             # 42., 42.42
        ]

    def parse(self, text: str) -> ParseResult:
        """
        Match one numeric literal at the start of text.

        Plain integers such as ``42`` are not literals here; the amount
        grammar handles them with its own digit alternative.

        Args:
            text: Input slice

        Returns:
            ParseResult whose value is the matched span, separators included
        """
        for pattern, shape in self.literal_patterns:
            match = pattern.match(text)
            if match:
                span = match.group()
                result = ParseResult(
                    value=span,
                    remainder=text[match.end():],
                    source_text=span,
                    metadata={'shape': shape},
                )
                self._log_result(result)
                return result

        raise TokenMismatch("expected numeric literal", self.rule_name, text)


def to_decimal(span: str, remainder: str = "") -> Decimal:
    """
    Convert a numeric span to an exact Decimal.

    Args:
        span: Literal text, possibly containing '_' grouping separators
        remainder: Input following the span, reported on failure

    Returns:
        Decimal value of the span

    Raises:
        NumericConversionFailure: If the stripped span is not a valid number
    """
    cleaned = span.replace('_', '')
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise NumericConversionFailure(
            f"cannot convert {span!r} to decimal", "decimal", span + remainder,
            details={'span': span},
        ) from None
    return value
