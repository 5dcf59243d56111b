"""Daily financial report engine.

raw collections -> resolve_period -> filter_records -> build_daily_report
-> summaries (from the total row) and, on demand, day_detail.
"""

from pinreport.reports.daily import DailyReport, build_daily_report, sort_rows
from pinreport.reports.detail import day_detail
from pinreport.reports.filters import FilteredRecords, filter_records
from pinreport.reports.period import resolve_period
from pinreport.reports.service import build_day_detail, build_report
from pinreport.reports.summary import (
    cashflow_summary,
    inventory_summary,
    production_summary,
    revenue_summary,
)

__all__ = [
    "DailyReport",
    "FilteredRecords",
    "build_daily_report",
    "build_day_detail",
    "build_report",
    "cashflow_summary",
    "day_detail",
    "filter_records",
    "inventory_summary",
    "production_summary",
    "resolve_period",
    "revenue_summary",
    "sort_rows",
]
