"""Select the records that fall inside a report range."""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TypeVar

from pinreport.core.logging import get_logger
from pinreport.models.enums import ProductionStatus
from pinreport.models.records import CashTransaction, ProductionOrder, RepairOrder, Sale
from pinreport.models.report_schemas import DateRange, RecordCollections
from pinreport.utils.datetime import parse_instant

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class FilteredRecords:
    """Records of each collection whose date lies in the range."""

    sales: list[Sale] = field(default_factory=list)
    repairs: list[RepairOrder] = field(default_factory=list)
    transactions: list[CashTransaction] = field(default_factory=list)
    orders: list[ProductionOrder] = field(default_factory=list)
    skipped: int = 0


def _in_range(
    records: Iterable[T],
    date_of: Callable[[T], Any],
    date_range: DateRange,
    kind: str,
) -> tuple[list[T], int]:
    kept: list[T] = []
    skipped = 0
    for record in records:
        instant = parse_instant(date_of(record))
        if instant is None:
            skipped += 1
            logger.warning(
                "report.record_skipped",
                kind=kind,
                record_id=getattr(record, "id", None),
                raw_date=str(date_of(record)),
            )
            continue
        if date_range.contains(instant):
            kept.append(record)
    return kept, skipped


def filter_records(collections: RecordCollections, date_range: DateRange) -> FilteredRecords:
    """
    Filter each collection down to the records dated inside date_range.

    Cancelled production orders are dropped. Records with a missing or
    unreadable date are skipped and counted rather than raising.
    """
    sales, skipped_sales = _in_range(collections.sales, lambda s: s.date, date_range, "sale")
    repairs, skipped_repairs = _in_range(
        collections.repair_orders, lambda r: r.creation_date, date_range, "repair_order"
    )
    transactions, skipped_transactions = _in_range(
        collections.cash_transactions, lambda t: t.date, date_range, "cash_transaction"
    )
    orders, skipped_orders = _in_range(
        collections.production_orders, lambda o: o.creation_date, date_range, "production_order"
    )
    orders = [o for o in orders if o.status != ProductionStatus.CANCELLED.value]

    return FilteredRecords(
        sales=sales,
        repairs=repairs,
        transactions=transactions,
        orders=orders,
        skipped=skipped_sales + skipped_repairs + skipped_transactions + skipped_orders,
    )
