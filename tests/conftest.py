"""Shared pytest fixtures."""

import pytest

SAMPLE_TRANSACTION = (
    "2024-3-2=2024/03/03 * (#100) Merchant | Memo\n"
    "\tExpenses:Food  USD20.00\n"
    "\tAssets:Checking  "
)


@pytest.fixture
def sample_transaction():
    return SAMPLE_TRANSACTION


@pytest.fixture
def write_journal(tmp_path):
    """Write a journal file into tmp_path and return its path."""
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
