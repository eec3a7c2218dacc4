"""Clearance state marker parsing."""

from .base import BaseParser, ParseResult
from ..models import TransactionState


class StateParser(BaseParser):
    """Reads an optional ``*`` (cleared) or ``!`` (pending) marker."""

    rule_name = "state"

    def __init__(self):
        super().__init__()
        self.state_markers = {
            '*': TransactionState.CLEARED,
            '!': TransactionState.PENDING,
        }

    def parse(self, text: str) -> ParseResult:
        """Never fails: anything else, including empty input, is UNCLEARED."""
        marker = text[:1]
        state = self.state_markers.get(marker)
        if state is None:
            return ParseResult(value=TransactionState.UNCLEARED, remainder=text)

        result = ParseResult(value=state, remainder=text[1:], source_text=marker)
        self._log_result(result)
        return result
