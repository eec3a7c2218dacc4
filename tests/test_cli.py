"""Tests for the command-line interface and batch processor."""

import json

import yaml
from click.testing import CliRunner
from openpyxl import load_workbook

from plain_text_accounting.cli import cli, JournalProcessor
from plain_text_accounting.config import Settings


class TestJournalProcessor:
    """Test suite for JournalProcessor."""

    def setup_method(self):
        """Set up test fixtures."""
        self.processor = JournalProcessor(Settings(max_workers=2, progress=False))

    def test_batch_keeps_input_order(self, write_journal):
        """Results come back in the order the files were given."""
        paths = [
            write_journal(f"t{i}.ledger", f"2024-01-{i + 1:02d} Memo {i}\n\tA:B  USD{i}")
            for i in range(6)
        ]

        results = self.processor.process_batch(paths)

        assert [r['file_path'] for r in results] == [str(p) for p in paths]
        assert [r['transaction'].memo for r in results] == [f"Memo {i}" for i in range(6)]
        assert self.processor.stats['parsed'] == 6

    def test_failure_does_not_stop_batch(self, write_journal, sample_transaction):
        """A bad file is reported and the rest still parse."""
        good = write_journal("good.ledger", sample_transaction)
        bad = write_journal("bad.ledger", "2024-13-40 * Memo")

        results = self.processor.process_batch([good, bad])

        assert results[0]['transaction'] is not None
        assert results[1]['transaction'] is None
        assert "valid calendar date" in results[1]['error']
        assert self.processor.stats == {'total_files': 2, 'parsed': 1, 'partial': 0, 'failed': 1}
        assert self.processor.review_queue.items[0].error_type == "InvalidCalendarDate"

    def test_oversized_date_does_not_stop_batch(self, write_journal, sample_transaction):
        """A date too long to convert is reported like any other bad date."""
        bad = write_journal("huge.ledger", "1" * 5000 + "-01-01 Memo")
        good = write_journal("good.ledger", sample_transaction)

        results = self.processor.process_batch([bad, good])

        assert results[0]['transaction'] is None
        assert results[1]['transaction'].code == "#100"
        assert self.processor.review_queue.items[0].error_type == "InvalidCalendarDate"

    def test_unexpected_worker_error_does_not_stop_batch(self, write_journal, sample_transaction, monkeypatch):
        """An exception outside the grammar is logged, counted and queued for review."""
        good = write_journal("good.ledger", sample_transaction)
        broken = write_journal("broken.ledger", sample_transaction)
        process_single_file = self.processor.process_single_file

        def flaky(journal_path):
            if journal_path == broken:
                raise RuntimeError("disk vanished")
            return process_single_file(journal_path)

        monkeypatch.setattr(self.processor, "process_single_file", flaky)

        results = self.processor.process_batch([broken, good])

        assert results[0]['transaction'] is None
        assert results[0]['error'] == "disk vanished"
        assert results[1]['transaction'] is not None
        assert self.processor.stats['failed'] == 1
        assert self.processor.stats['parsed'] == 1
        assert self.processor.review_queue.items[0].error_type == "RuntimeError"

    def test_review_items_in_input_order(self, write_journal):
        """Review items follow the order files were given, not completion order."""
        paths = [write_journal(f"bad{i}.ledger", f"garbage {i}") for i in range(8)]

        self.processor.process_batch(paths)

        assert [item.file_path for item in self.processor.review_queue.items] == [str(p) for p in paths]

    def test_partial_parse_flagged(self, write_journal):
        """Trailing non-posting lines are sent to review."""
        path = write_journal("partial.ledger", "2024-01-01 Memo\n\tA:B  USD1\nnot a posting")

        result = self.processor.process_single_file(path)

        assert len(result['transaction'].postings) == 1
        assert self.processor.stats['partial'] == 1
        assert self.processor.review_queue.items[0].rule == "posting"

    def test_empty_batch(self):
        """No files means no results."""
        assert self.processor.process_batch([]) == []


class TestCli:
    """Test suite for the click commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_parse_json(self, tmp_path, write_journal, sample_transaction):
        """'parse' writes structured JSON."""
        journal = write_journal("journal.ledger", sample_transaction)
        output = tmp_path / "out.json"

        result = self.runner.invoke(cli, ['parse', str(journal), '--output', str(output),
                                          '--no-progress', '--config', str(tmp_path / 'none.yml')])

        assert result.exit_code == 0, result.output
        payload = json.loads(output.read_text(encoding="utf-8"))
        assert payload[0]['transaction']['code'] == '#100'
        assert payload[0]['transaction']['postings'][0]['amount'] == {'currency': 'USD', 'value': '20.00'}
        assert payload[0]['error'] is None

    def test_parse_yaml_from_config(self, tmp_path, write_journal, sample_transaction):
        """The output format can come from the settings file."""
        journal = write_journal("journal.ledger", sample_transaction)
        config = write_journal("ledger.yml", "output_format: yaml\nprogress: false\n")
        output = tmp_path / "out.yml"

        result = self.runner.invoke(cli, ['parse', str(journal), '--output', str(output),
                                          '--config', str(config)])

        assert result.exit_code == 0, result.output
        payload = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert payload[0]['transaction']['merchant'] == 'Merchant'
        assert payload[0]['transaction']['state'] == 'cleared'

    def test_parse_failure_exit_code(self, tmp_path, write_journal):
        """Any failed file makes the command exit with 1."""
        journal = write_journal("bad.ledger", "not a transaction")
        output = tmp_path / "out.json"

        result = self.runner.invoke(cli, ['parse', str(journal), '--output', str(output),
                                          '--no-progress', '--config', str(tmp_path / 'none.yml')])

        assert result.exit_code == 1
        payload = json.loads(output.read_text(encoding="utf-8"))
        assert payload[0]['transaction'] is None
        assert payload[0]['error'].startswith("date:")

    def test_invalid_config(self, tmp_path, write_journal, sample_transaction):
        """A bad settings file is a usage error."""
        journal = write_journal("journal.ledger", sample_transaction)
        config = write_journal("ledger.yml", "colour: blue\n")

        result = self.runner.invoke(cli, ['parse', str(journal), '--config', str(config)])

        assert result.exit_code == 2

    def test_export(self, tmp_path, write_journal, sample_transaction):
        """'export' writes an Excel workbook."""
        journal = write_journal("journal.ledger", sample_transaction)
        output = tmp_path / "postings.xlsx"

        result = self.runner.invoke(cli, ['export', str(journal), '--out', str(output),
                                          '--no-progress', '--config', str(tmp_path / 'none.yml')])

        assert result.exit_code == 0, result.output
        rows = list(load_workbook(output)["Postings"].iter_rows(values_only=True))
        assert len(rows) == 3
