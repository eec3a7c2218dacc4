"""Command-line interface for parsing ledger transaction files."""

import logging
import click
from pathlib import Path
from typing import List, Dict, Any, Optional
import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from tqdm import tqdm
import sys

import yaml

from .config import Settings, ConfigurationError, load_settings
from .parsers import TransactionParser, ParseError
from .review import ReviewQueue
from .export import ExcelExporter

# Logs go to stderr so stdout carries only parse output
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger(__name__)


class JournalProcessor:
    """Parses a batch of journal files, one transaction block per file."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the journal processor.

        Args:
            settings: Run settings (workers, encoding, progress bar)
        """
        self.settings = settings or Settings()
        self.parser = TransactionParser()
        self.review_queue = ReviewQueue()

        self.stats = {
            'total_files': 0,
            'parsed': 0,
            'partial': 0,
            'failed': 0,
        }

    def process_single_file(self, journal_path: Path) -> Dict[str, Any]:
        """
        Read a journal file and parse it as one transaction.

        Args:
            journal_path: Path to the journal text file

        Returns:
            Dictionary with 'file_path', 'transaction', 'remainder' and 'error'
        """
        try:
            text = journal_path.read_text(encoding=self.settings.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {journal_path}: {e}")
            self.review_queue.add_item(file_path=str(journal_path),
                                       reason=f"Could not read file: {e}",
                                       error_type=type(e).__name__)
            self.stats['failed'] += 1
            return self._failed(journal_path, str(e))

        try:
            result = self.parser.parse(text)
        except ParseError as e:
            logger.error(f"Failed to parse {journal_path}: {e}")
            self.review_queue.add_from_error(str(journal_path), e)
            self.stats['failed'] += 1
            return self._failed(journal_path, str(e))

        if self.review_queue.add_from_remainder(str(journal_path), result.remainder):
            self.stats['partial'] += 1
        self.stats['parsed'] += 1

        return {
            'file_path': str(journal_path),
            'transaction': result.value,
            'remainder': result.remainder,
            'error': None,
        }

    @staticmethod
    def _failed(journal_path: Path, error: str) -> Dict[str, Any]:
        return {
            'file_path': str(journal_path),
            'transaction': None,
            'remainder': None,
            'error': error,
        }

    def process_batch(self, journal_files: List[Path]) -> List[Dict[str, Any]]:
        """
        Parse all files in parallel.

        Args:
            journal_files: Paths to journal files

        Returns:
            List of results in the same order as journal_files
        """
        self.stats['total_files'] = len(journal_files)
        if not journal_files:
            logger.warning("No journal files given!")
            return []

        results: List[Optional[Dict[str, Any]]] = [None] * len(journal_files)

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            future_to_index = {
                executor.submit(self.process_single_file, journal_file): index
                for index, journal_file in enumerate(journal_files)
            }

            with tqdm(total=len(journal_files), desc="Parsing journals",
                      disable=not self.settings.progress) as pbar:
                for future in as_completed(future_to_index):
                    index = future_to_index[future]
                    journal_file = journal_files[index]
                    try:
                        results[index] = future.result()
                    except Exception as e:
                        logger.error(f"Exception processing {journal_file}: {e}")
                        self.review_queue.add_item(file_path=str(journal_file),
                                                   reason=f"Processing failed: {e}",
                                                   error_type=type(e).__name__)
                        self.stats['failed'] += 1
                        results[index] = self._failed(journal_file, str(e))

                    pbar.update(1)
                    pbar.set_postfix({
                        'parsed': self.stats['parsed'],
                        'failed': self.stats['failed']
                    })

        # Workers finish in any order; report review items in input order
        order = {}
        for index, journal_file in enumerate(journal_files):
            order.setdefault(str(journal_file), index)
        self.review_queue.items.sort(key=lambda item: order.get(item.file_path, len(journal_files)))

        logger.info(f"Batch parsing complete. Parsed: {self.stats['parsed']}, "
                    f"Partial: {self.stats['partial']}, Failed: {self.stats['failed']}")
        return results


def _result_to_dict(result: Dict[str, Any]) -> Dict[str, Any]:
    transaction = result['transaction']
    return {
        'file': result['file_path'],
        'transaction': transaction.to_dict() if transaction else None,
        'remainder': result['remainder'],
        'error': result['error'],
    }


def _build_processor(config: Path, max_workers: Optional[int], no_progress: bool,
                     debug: bool, **overrides) -> JournalProcessor:
    try:
        settings = load_settings(config).override(
            max_workers=max_workers,
            progress=False if no_progress else None,
            **overrides,
        )
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    logging.getLogger().setLevel(logging.DEBUG if debug else settings.log_level)
    if debug:
        click.echo("Debug mode enabled - parser rule logs will be shown", err=True)

    return JournalProcessor(settings)


@click.group()
def cli():
    """Plain Text Accounting - parse ledger transactions into structured data."""
    pass


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--format', 'output_format', default=None, type=click.Choice(['json', 'yaml']),
              help='Output format')
@click.option('--output', 'output_path', default=None, type=click.Path(dir_okay=False, path_type=Path),
              help='Write output to a file instead of stdout')
@click.option('--max-workers', default=None, type=int, help='Maximum number of parallel workers')
@click.option('--config', default='ledger.yml', type=click.Path(path_type=Path),
              help='Path to settings file')
@click.option('--no-progress', is_flag=True, help='Hide the progress bar')
@click.option('--debug', is_flag=True, help='Enable debug output')
def parse(files, output_format, output_path, max_workers, config, no_progress, debug):
    """
    Parse each FILE as one transaction and print the structured result.

    Example:
        ptacct parse journal.ledger --format yaml
    """
    processor = _build_processor(config, max_workers, no_progress, debug,
                                 output_format=output_format)
    results = processor.process_batch(list(files))
    payload = [_result_to_dict(result) for result in results]

    if processor.settings.output_format == 'yaml':
        rendered = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    else:
        rendered = json.dumps(payload, indent=2, ensure_ascii=False)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding='utf-8')
        click.echo(f"Results written to {output_path}", err=True)
    else:
        click.echo(rendered)

    _report(processor)
    if processor.stats['failed']:
        sys.exit(1)


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--out', 'output_path', required=True, type=click.Path(dir_okay=False, path_type=Path),
              help='Excel workbook to write')
@click.option('--max-workers', default=None, type=int, help='Maximum number of parallel workers')
@click.option('--config', default='ledger.yml', type=click.Path(path_type=Path),
              help='Path to settings file')
@click.option('--no-progress', is_flag=True, help='Hide the progress bar')
@click.option('--debug', is_flag=True, help='Enable debug output')
def export(files, output_path, max_workers, config, no_progress, debug):
    """
    Parse each FILE and export all postings to an Excel workbook.

    Example:
        ptacct export journals/*.ledger --out postings.xlsx
    """
    processor = _build_processor(config, max_workers, no_progress, debug)
    results = processor.process_batch(list(files))

    exporter = ExcelExporter(output_path)
    exporter.export_transactions(results, processor.review_queue.items)
    click.echo(f"Excel: {output_path}", err=True)

    _report(processor)


def _report(processor: JournalProcessor):
    stats = processor.stats
    click.echo(f"Files: {stats['total_files']}, parsed: {stats['parsed']}, "
               f"partial: {stats['partial']}, failed: {stats['failed']}", err=True)

    items = processor.review_queue.items
    if items:
        click.echo(f"{len(items)} file(s) need review:", err=True)
        for item in items[:10]:
            click.echo(f"  - {Path(item.file_path).name}: {item.reason}", err=True)
        if len(items) > 10:
            click.echo(f"  ... and {len(items) - 10} more", err=True)


if __name__ == '__main__':
    cli()
