"""CSV report of a group's expenses and balances."""

import csv
import re
from decimal import Decimal
from enum import Enum
from io import StringIO
from typing import Dict, Sequence

from splitbook.models.balance import Balance
from splitbook.models.base import CENT
from splitbook.models.group import Group
from splitbook.models.ledger import Expense


class ExportDataType(str, Enum):
    ALL = "all"
    EXPENSES = "expenses"
    BALANCES = "balances"


def _money(value: Decimal) -> str:
    return str(value.quantize(CENT))


def report_filename(group: Group) -> str:
    safe_name = re.sub(r"\s+", "_", group.name)
    return f"{safe_name}_report.csv"


def build_csv_report(
    expenses: Sequence[Expense],
    balances: Sequence[Balance],
    names: Dict[str, str],
    data_type: ExportDataType = ExportDataType.ALL,
) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    if data_type in (ExportDataType.ALL, ExportDataType.EXPENSES):
        writer.writerow(["EXPENSES"])
        writer.writerow(["Description", "Amount", "Paid By", "Date"])
        for expense in expenses:
            writer.writerow([
                expense.title,
                _money(expense.amount),
                names.get(expense.paid_by, "Unknown"),
                expense.date.isoformat(),
            ])
        writer.writerow([])

    if data_type in (ExportDataType.ALL, ExportDataType.BALANCES):
        writer.writerow(["BALANCES"])
        writer.writerow(["Name", "Total Paid", "Total Owed", "Net Balance", "Status"])
        for balance in balances:
            writer.writerow([
                names.get(balance.participant_id, "Unknown"),
                _money(balance.total_paid),
                _money(balance.total_owed),
                _money(balance.net_balance),
                balance.status,
            ])

    return buffer.getvalue()
