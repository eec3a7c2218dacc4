"""Parenthesized transaction code parsing."""

import re
from .base import BaseParser, ParseResult, TokenMismatch


class CodeParser(BaseParser):
    """Parses ``(code)``; the code is everything up to the closing parenthesis."""

    rule_name = "code"

    def __init__(self):
        super().__init__()
        self.open_pattern = re.compile(r'\(')
        self.code_pattern = re.compile(r'\((?P<code>[^)\r\n]*)\)')

    def parse(self, text: str) -> ParseResult:
        self._expect(self.open_pattern, text, "'('")
        match = self.code_pattern.match(text)
        if match is None:
            raise TokenMismatch("unterminated code, expected ')'", self.rule_name, text)

        result = ParseResult(
            value=match.group('code'),
            remainder=text[match.end():],
            source_text=match.group(),
        )
        self._log_result(result)
        return result
