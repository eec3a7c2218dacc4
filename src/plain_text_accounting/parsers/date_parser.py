"""Date parsing for transaction headers."""

import re
import logging
from datetime import date
from .base import BaseParser, ParseResult, InvalidCalendarDate

logger = logging.getLogger(__name__)


class DateParser(BaseParser):
    """Parses ``year SEP month SEP day`` where each SEP is ``-`` or ``/``."""

    rule_name = "date"

    def __init__(self):
        super().__init__()

        # Separators are matched independently, so 2024-01/01 is accepted.
        self.date_pattern = re.compile(
            r'(?P<year>[0-9]+)(?P<sep1>[-/])(?P<month>[0-9]+)(?P<sep2>[-/])(?P<day>[0-9]+)'
        )

    def parse(self, text: str) -> ParseResult:
        """
        Parse a calendar date at the start of text.

        Args:
            text: Input slice

        Returns:
            ParseResult with a ``datetime.date`` value

        Raises:
            TokenMismatch: If the text does not start with a date token
            InvalidCalendarDate: If the digits do not form a real date
        """
        match = self._expect(self.date_pattern, text, "date")
        parts = {name: match.group(name) for name in ('year', 'month', 'day')}

        # int() itself can fail on digit runs past the interpreter's length limit
        try:
            value = date(int(parts['year']), int(parts['month']), int(parts['day']))
        except (ValueError, OverflowError) as e:
            self.logger.debug(f"Invalid date {match.group()[:40]}: {e}")
            raise InvalidCalendarDate(
                f"{match.group()} is not a valid calendar date", self.rule_name, text,
                details=parts,
            ) from None

        result = ParseResult(
            value=value,
            remainder=text[match.end():],
            source_text=match.group(),
            metadata={'separators': match.group('sep1') + match.group('sep2')},
        )
        self._log_result(result)
        return result


class AuxiliaryDateParser(BaseParser):
    """Parses the ``=DATE`` effective-date suffix that follows a primary date."""

    rule_name = "auxiliary_date"

    def __init__(self, date_parser: DateParser = None):
        super().__init__()
        self.date_parser = date_parser or DateParser()
        self.marker_pattern = re.compile(r'=')

    def parse(self, text: str) -> ParseResult:
        marker = self._expect(self.marker_pattern, text, "'='")
        inner = self.date_parser.parse(text[marker.end():])
        return ParseResult(
            value=inner.value,
            remainder=inner.remainder,
            source_text=marker.group() + inner.source_text,
            metadata=inner.metadata,
        )
