"""Review queue for journal files that failed to parse or parsed only partially."""

import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
from pathlib import Path

from .parsers.base import ParseError

logger = logging.getLogger(__name__)


@dataclass
class ReviewItem:
    """Represents a journal file that needs manual review."""
    file_path: str
    reason: str
    rule: Optional[str] = None
    error_type: Optional[str] = None
    raw_snippet: str = ""


class ReviewQueue:
    """Collects per-file parse problems so a batch can continue past them."""

    def __init__(self, snippet_length: int = 200):
        """
        Initialize review queue.

        Args:
            snippet_length: Maximum characters of unparsed text kept per item
        """
        self.items: List[ReviewItem] = []
        self.snippet_length = snippet_length

    def add_item(self,
                 file_path: str,
                 reason: str,
                 rule: Optional[str] = None,
                 error_type: Optional[str] = None,
                 raw_snippet: str = ""):
        """Add an item to the review queue."""
        item = ReviewItem(
            file_path=file_path,
            reason=reason,
            rule=rule,
            error_type=error_type,
            raw_snippet=self._make_snippet(raw_snippet),
        )
        self.items.append(item)
        logger.debug(f"Added to review queue: {Path(file_path).name} - {reason}")

    def add_from_error(self, file_path: str, error: ParseError):
        """Record a failed parse."""
        self.add_item(
            file_path=file_path,
            reason=f"Parse failed: {error.message}",
            rule=error.rule,
            error_type=type(error).__name__,
            raw_snippet=error.remainder,
        )

    def add_from_remainder(self, file_path: str, remainder: str) -> bool:
        """
        Record a successful parse that left trailing input behind.

        Args:
            file_path: Path to the processed file
            remainder: Unconsumed input after the transaction

        Returns:
            True if an item was added
        """
        if not remainder.strip():
            return False

        line_count = len(remainder.strip().splitlines())
        self.add_item(
            file_path=file_path,
            reason=f"{line_count} trailing line(s) not parsed as postings",
            rule="posting",
            raw_snippet=remainder.strip(),
        )
        return True

    def _make_snippet(self, text: str) -> str:
        snippet = text.replace('\n', ' ')[:self.snippet_length]
        # Remove control characters Excel rejects
        snippet = ''.join(char for char in snippet if ord(char) >= 32 or char == '\t')
        if len(text) > self.snippet_length:
            snippet += "..."
        return snippet

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the review queue."""
        if not self.items:
            return {"total": 0}

        by_error_type: Dict[str, int] = {}
        partial = 0
        for item in self.items:
            if item.error_type:
                by_error_type[item.error_type] = by_error_type.get(item.error_type, 0) + 1
            else:
                partial += 1

        return {
            "total": len(self.items),
            "failed": len(self.items) - partial,
            "partial": partial,
            "error_breakdown": by_error_type,
        }

    def clear(self):
        """Clear all items from the review queue."""
        self.items.clear()
