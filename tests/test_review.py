"""Tests for the review queue."""

from plain_text_accounting.review import ReviewQueue
from plain_text_accounting.parsers.base import InvalidCalendarDate, TokenMismatch


class TestReviewQueue:
    """Test suite for ReviewQueue."""

    def setup_method(self):
        """Set up test fixtures."""
        self.queue = ReviewQueue()

    def test_add_from_error(self):
        """Parse errors become review items with rule and error type."""
        error = InvalidCalendarDate("2024-13-40 is not a valid calendar date", "date", "2024-13-40 Memo")

        self.queue.add_from_error("journals/bad.ledger", error)

        item = self.queue.items[0]
        assert item.rule == "date"
        assert item.error_type == "InvalidCalendarDate"
        assert "not a valid calendar date" in item.reason
        assert item.raw_snippet == "2024-13-40 Memo"

    def test_blank_remainder_not_flagged(self):
        """Whitespace-only leftovers are fine."""
        assert self.queue.add_from_remainder("a.ledger", "\n\n") is False
        assert self.queue.items == []

    def test_trailing_lines_flagged(self):
        """Unparsed trailing lines are queued."""
        assert self.queue.add_from_remainder("a.ledger", "\n; note\n\tAssets:Cash") is True

        item = self.queue.items[0]
        assert item.reason.startswith("2 trailing line(s)")
        assert item.error_type is None
        assert "\n" not in item.raw_snippet

    def test_snippet_truncated(self):
        """Long snippets are cut and marked."""
        queue = ReviewQueue(snippet_length=10)
        queue.add_item("a.ledger", "reason", raw_snippet="x" * 50)

        assert queue.items[0].raw_snippet == "x" * 10 + "..."

    def test_summary(self):
        """Summary separates failures from partial parses."""
        self.queue.add_from_error("a.ledger", TokenMismatch("expected date", "date", ""))
        self.queue.add_from_error("b.ledger", TokenMismatch("expected date", "date", ""))
        self.queue.add_from_remainder("c.ledger", "junk")

        summary = self.queue.get_summary()

        assert summary == {
            "total": 3,
            "failed": 2,
            "partial": 1,
            "error_breakdown": {"TokenMismatch": 2},
        }

    def test_empty_summary_and_clear(self):
        """An empty queue reports zero; clear empties it."""
        self.queue.add_item("a.ledger", "reason")
        self.queue.clear()

        assert self.queue.get_summary() == {"total": 0}
