"""One-call report pipeline used by the API."""

from datetime import date, datetime

from pinreport.core.errors import NotFoundError
from pinreport.core.logging import get_logger
from pinreport.models.enums import SortColumn, SortDirection
from pinreport.models.report_schemas import (
    DayDetail,
    FinancialReport,
    PeriodRequest,
    RecordCollections,
)
from pinreport.reports.daily import build_daily_report
from pinreport.reports.detail import day_detail
from pinreport.reports.filters import filter_records
from pinreport.reports.period import resolve_period
from pinreport.reports.summary import (
    cashflow_summary,
    inventory_summary,
    production_summary,
    revenue_summary,
)

logger = get_logger(__name__)

# Rows shown in the cash-flow and production tab lists
RECENT_LIMIT = 20


def _resolve_and_filter(
    collections: RecordCollections,
    period: PeriodRequest,
    now: datetime | None,
):
    date_range = resolve_period(
        period.period,
        selected_month=period.selected_month,
        selected_year=period.selected_year,
        custom_start_date=period.custom_start_date,
        custom_end_date=period.custom_end_date,
        now=now,
    )
    return date_range, filter_records(collections, date_range)


def build_report(
    collections: RecordCollections,
    period: PeriodRequest,
    sort_column: SortColumn | str = SortColumn.DATE,
    sort_direction: SortDirection | str = SortDirection.ASC,
    now: datetime | None = None,
) -> FinancialReport:
    """
    Run the whole pipeline: range, filter, daily table, summary cards.

    Pure: the same collections, period and now always give the same report.
    """
    date_range, filtered = _resolve_and_filter(collections, period, now)
    daily = build_daily_report(filtered, date_range)

    report = FinancialReport(
        date_range=date_range,
        days_in_range=date_range.day_count,
        rows=daily.display_rows(sort_column, sort_direction),
        revenue=revenue_summary(daily.total),
        cashflow=cashflow_summary(daily.total, len(filtered.transactions)),
        production=production_summary(filtered.orders),
        inventory=inventory_summary(collections.materials, collections.products),
        unmatched_transactions=daily.unmatched_transactions,
        skipped_records=filtered.skipped,
        recent_transactions=filtered.transactions[:RECENT_LIMIT],
        production_orders=filtered.orders[:RECENT_LIMIT],
    )

    logger.info(
        "report.built",
        period=period.period.value,
        days=report.days_in_range,
        sales=len(filtered.sales),
        repairs=len(filtered.repairs),
        transactions=len(filtered.transactions),
        skipped=filtered.skipped,
    )
    return report


def build_day_detail(
    collections: RecordCollections,
    period: PeriodRequest,
    date_key: date,
    now: datetime | None = None,
) -> DayDetail:
    """
    Records behind one day of the report for the given period.

    Raises:
        NotFoundError: If date_key is not a day of the resolved range.
    """
    date_range, filtered = _resolve_and_filter(collections, period, now)
    if date_range.is_empty or not date_range.start.date() <= date_key <= date_range.end.date():
        raise NotFoundError(resource="ReportDay", resource_id=date_key.isoformat())
    return day_detail(date_key, filtered)
