"""CSV export of transactions."""

import csv
import io
from datetime import date
from typing import List, Optional

from src.domain.entities import Transaction

EXPORT_COLUMNS = (
    "Date",
    "Description",
    "Merchant",
    "Category",
    "Amount",
    "Type",
    "Payment Method",
    "Account",
)


def export_filename(start: Optional[date], end: Optional[date]) -> str:
    start_text = start.isoformat() if start else "all"
    end_text = end.isoformat() if end else "now"
    return f"transactions_{start_text}_{end_text}.csv"


def transactions_to_csv(transactions: List[Transaction]) -> str:
    """
    Render transactions as CSV, newest first.

    Dates use the Indian DD/MM/YYYY form and amounts two decimals.
    Fields containing commas, quotes or newlines are quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)

    for txn in sorted(transactions, key=lambda t: t.date, reverse=True):
        writer.writerow(
            (
                txn.date.strftime("%d/%m/%Y"),
                txn.description,
                txn.merchant,
                txn.category.value,
                f"{txn.amount:.2f}",
                txn.type.value,
                txn.payment_method.value,
                txn.account,
            )
        )

    return buffer.getvalue()
