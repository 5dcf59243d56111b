"""Daily report table: one row per local calendar day plus a total row."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from pinreport.core.logging import get_logger
from pinreport.models.enums import (
    OPERATING_EXPENSE_CATEGORIES,
    SortColumn,
    SortDirection,
    TransactionCategory,
    TransactionType,
)
from pinreport.models.records import CashTransaction
from pinreport.models.report_schemas import MONEY_FIELDS, DailyReportRow, DateRange
from pinreport.reports.filters import FilteredRecords
from pinreport.utils.datetime import format_date_vn, iter_days, local_date_key

logger = get_logger(__name__)

ZERO = Decimal("0")
TOTAL_LABEL = "Tổng:"


@dataclass(frozen=True)
class DailyReport:
    """Aggregated table for a range.

    rows holds the day rows ascending by date; total is their column-wise sum.
    """

    date_range: DateRange
    rows: list[DailyReportRow] = field(default_factory=list)
    total: DailyReportRow = field(
        default_factory=lambda: DailyReportRow(date_key=None, date_formatted=TOTAL_LABEL, is_total=True)
    )
    unmatched_transactions: list[str] = field(default_factory=list)

    def display_rows(
        self,
        column: SortColumn | str = SortColumn.DATE,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> list[DailyReportRow]:
        """Day rows sorted for display with the total row last.

        An empty range has nothing to display, not even a total row.
        """
        if not self.rows:
            return []
        return sort_rows([*self.rows, self.total], column, direction)


def classify_transaction(tx: CashTransaction) -> str | None:
    """Row column a cash transaction accrues to, or None if none applies."""
    if tx.category == TransactionCategory.INVENTORY_PURCHASE.value:
        return "capital_cost"
    if tx.type == TransactionType.INCOME.value and tx.category == TransactionCategory.OTHER_INCOME.value:
        return "other_income"
    if tx.type == TransactionType.EXPENSE.value and tx.category in OPERATING_EXPENSE_CATEGORIES:
        return "other_expense"
    return None


def _empty_bucket() -> dict[str, Decimal]:
    return {name: ZERO for name in MONEY_FIELDS}


def build_daily_report(filtered: FilteredRecords, date_range: DateRange) -> DailyReport:
    """
    Fold filtered records into one row per calendar day of date_range.

    Every day in range gets a row, including idle days. Repairs count
    regardless of payment status. Transactions whose type/category pair maps
    to no column are listed in unmatched_transactions.
    """
    if date_range.is_empty:
        logger.info(
            "report.empty_range",
            start=date_range.start.isoformat(),
            end=date_range.end.isoformat(),
        )
        return DailyReport(date_range=date_range)

    buckets: dict[date, dict[str, Decimal]] = {
        day: _empty_bucket() for day in iter_days(date_range.start.date(), date_range.end.date())
    }

    for sale in filtered.sales:
        bucket = buckets.get(local_date_key(sale.date))
        if bucket is None:
            continue
        cost = sale.cost
        bucket["sales_revenue"] += sale.total
        bucket["sales_cogs"] += cost
        bucket["sales_profit"] += sale.total - cost

    for repair in filtered.repairs:
        bucket = buckets.get(local_date_key(repair.creation_date))
        if bucket is None:
            continue
        bucket["repair_material_cost"] += repair.material_cost
        bucket["repair_labor_cost"] += repair.labor_cost

    unmatched: list[str] = []
    for tx in filtered.transactions:
        bucket = buckets.get(local_date_key(tx.date))
        if bucket is None:
            continue
        column = classify_transaction(tx)
        if column is None:
            unmatched.append(tx.id)
            logger.info(
                "report.transaction_unmatched",
                transaction_id=tx.id,
                type=tx.type,
                category=tx.category,
            )
            continue
        bucket[column] += abs(tx.amount)

    rows = []
    for day in sorted(buckets):
        bucket = buckets[day]
        bucket["total_revenue"] = bucket["sales_revenue"] + bucket["repair_labor_cost"]
        bucket["net_profit"] = (bucket["sales_profit"] + bucket["other_income"]) - bucket["other_expense"]
        rows.append(DailyReportRow(date_key=day, date_formatted=format_date_vn(day), **bucket))

    total = DailyReportRow(
        date_key=None,
        date_formatted=TOTAL_LABEL,
        is_total=True,
        **{name: sum((getattr(row, name) for row in rows), ZERO) for name in MONEY_FIELDS},
    )

    return DailyReport(
        date_range=date_range,
        rows=rows,
        total=total,
        unmatched_transactions=unmatched,
    )


def sort_rows(
    rows: list[DailyReportRow],
    column: SortColumn | str = SortColumn.DATE,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[DailyReportRow]:
    """
    Sort day rows by a column, keeping any total row pinned last.

    Ties keep their incoming (date) order in both directions.
    """
    column = SortColumn(column)
    reverse = SortDirection(direction) is SortDirection.DESC

    day_rows = [row for row in rows if not row.is_total]
    total_rows = [row for row in rows if row.is_total]

    if column is SortColumn.DATE:
        ordered = sorted(day_rows, key=lambda row: row.date_key, reverse=reverse)
    else:
        ordered = sorted(day_rows, key=lambda row: getattr(row, column.value), reverse=reverse)

    return ordered + total_rows
