"""Excel export of parsed transactions and review items."""

import logging
from typing import List, Dict, Any
from pathlib import Path
import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils.dataframe import dataframe_to_rows

from .models import Transaction
from .review import ReviewItem

logger = logging.getLogger(__name__)

POSTING_COLUMNS = ["File Name", "Date", "Auxiliary Date", "State", "Code", "Merchant",
                   "Memo", "Account", "Currency", "Amount"]
REVIEW_COLUMNS = ["File Name", "Error Type", "Rule", "Reason", "Raw Snippet"]


class ExcelExporter:
    """Export parsed postings and review data to Excel."""

    def __init__(self, output_path: Path):
        """
        Initialize Excel exporter.

        Args:
            output_path: Path for the output Excel file
        """
        self.output_path = output_path
        self.workbook = Workbook()

    def export_transactions(self,
                            results: List[Dict[str, Any]],
                            review_items: List[ReviewItem]):
        """
        Export postings and review items to a workbook with two sheets.

        Args:
            results: Processing results, each with 'file_path' and a
                'transaction' (None when parsing failed)
            review_items: List of items needing review
        """
        try:
            # Remove default sheet
            if "Sheet" in self.workbook.sheetnames:
                self.workbook.remove(self.workbook["Sheet"])

            postings = self.build_posting_rows(results)
            self._write_sheet("Postings", pd.DataFrame(postings, columns=POSTING_COLUMNS),
                              [14, 12, 14, 10, 10, 25, 40, 30, 10, 14])

            reviews = [self._review_row(item) for item in review_items]
            self._write_sheet("Review", pd.DataFrame(reviews, columns=REVIEW_COLUMNS),
                              [25, 22, 14, 40, 60])

            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.workbook.save(str(self.output_path))

            logger.info(f"Excel file exported to: {self.output_path}")

        except Exception as e:
            logger.error(f"Failed to export Excel file: {e}")
            raise

    @staticmethod
    def build_posting_rows(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Flatten transactions into one row per posting, header fields repeated."""
        rows = []
        for result in results:
            transaction: Transaction = result.get('transaction')
            if transaction is None:
                continue
            header = {
                "File Name": Path(result['file_path']).name,
                "Date": transaction.date.isoformat(),
                "Auxiliary Date": transaction.auxiliary_date.isoformat() if transaction.auxiliary_date else "",
                "State": transaction.state.value,
                "Code": transaction.code or "",
                "Merchant": transaction.merchant or "",
                "Memo": transaction.memo,
            }
            for posting in transaction.postings:
                row = dict(header)
                row["Account"] = posting.account.name
                # Decimal is written as text so the exact value survives
                row["Currency"] = posting.amount.currency if posting.amount else ""
                row["Amount"] = str(posting.amount.value) if posting.amount else ""
                rows.append(row)
        return rows

    @staticmethod
    def _review_row(item: ReviewItem) -> Dict[str, Any]:
        return {
            "File Name": Path(item.file_path).name,
            "Error Type": item.error_type or "",
            "Rule": item.rule or "",
            "Reason": item.reason,
            "Raw Snippet": item.raw_snippet,
        }

    def _write_sheet(self, title: str, df: pd.DataFrame, column_widths: List[int]):
        ws = self.workbook.create_sheet(title)

        for row in dataframe_to_rows(df, index=False, header=True):
            ws.append(row)

        for cell in ws[1]:
            cell.font = Font(bold=True)
            cell.fill = PatternFill(start_color="E6E6E6", end_color="E6E6E6", fill_type="solid")
            cell.alignment = Alignment(horizontal="center")

        for i, width in enumerate(column_widths, 1):
            column_letter = chr(64 + i)  # A, B, C...
            ws.column_dimensions[column_letter].width = width

        logger.info(f"Created sheet '{title}' with {len(df)} rows")
