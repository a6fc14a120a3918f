"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of the transaction history.
"""

import io
from datetime import date
from typing import Iterable, Optional

import pandas as pd

from models.transaction import Transaction
from utils.logger import get_logger

logger = get_logger(__name__)

EXPORT_COLUMNS = ["Date", "Type", "Amount", "Category", "Description", "ID"]


def _in_month(t: Transaction, year: Optional[int], month: Optional[int]) -> bool:
    if year is None or month is None:
        return True
    return t.date.year == year and t.date.month == month


class ExportService:
    """Generates downloadable financial reports in CSV and Excel formats."""

    def to_frame(self, transactions: Iterable[Transaction],
                 year: Optional[int] = None, month: Optional[int] = None) -> pd.DataFrame:
        """
        Tabulate transactions, optionally restricted to one calendar month,
        sorted by date (oldest first).
        """
        data = [
            {
                "Date": t.date.isoformat(),
                "Type": t.type,
                "Amount": t.amount,
                "Category": t.category,
                "Description": t.description,
                "ID": t.id,
            }
            for t in transactions
            if _in_month(t, year, month)
        ]
        df = pd.DataFrame(data, columns=EXPORT_COLUMNS)
        return df.sort_values("Date", kind="stable").reset_index(drop=True)

    def export_csv(self, transactions: Iterable[Transaction],
                   year: Optional[int] = None, month: Optional[int] = None) -> io.BytesIO:
        """
        Export transactions as a CSV file.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self.to_frame(transactions, year, month)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} records as CSV")
        return buffer

    def export_excel(self, transactions: Iterable[Transaction],
                     year: Optional[int] = None, month: Optional[int] = None) -> io.BytesIO:
        """
        Export transactions as an Excel (.xlsx) file with a second sheet
        summarising expenses per category.

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        df = self.to_frame(transactions, year, month)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Transactions", index=False)

            expenses = df[df["Type"] == "expense"]
            if not expenses.empty:
                summary = expenses.groupby("Category")["Amount"].sum().reset_index()
                summary.columns = ["Category", "Total"]
                summary.sort_values("Total", ascending=False).to_excel(
                    writer, sheet_name="Summary", index=False
                )

        buffer.seek(0)
        logger.info(f"Exported {len(df)} records as Excel")
        return buffer

    @staticmethod
    def filename(extension: str, year: Optional[int] = None, month: Optional[int] = None) -> str:
        if year is None or month is None:
            return f"transactions_{date.today():%Y_%m_%d}.{extension}"
        return f"transactions_{year}_{month:02d}.{extension}"
