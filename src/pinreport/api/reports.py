"""Daily Financial Report API.

Cache Versioning Strategy:
--------------------------
The service owns no data: callers post the record collections with every
request. When a caller also sends a collection_version, the computed report
is cached under a key built from that version, the period selection and the
sort. A caller bumps its version whenever any collection changes, so a stale
report is never served. CACHE_VERSION is bumped when calculation logic
changes.
"""

import os

from fastapi import APIRouter

from pinreport.core.cache import get_cache, make_cache_key, set_cache
from pinreport.core.logging import get_logger
from pinreport.models.enums import PeriodFilter
from pinreport.models.report_schemas import DayDetail, DayDetailRequest, FinancialReport, ReportRequest
from pinreport.reports.service import build_day_detail, build_report
from pinreport.utils.datetime import today_local

logger = get_logger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

# Cache version - increment when calculation logic changes
CACHE_VERSION = "v1"

REPORT_CACHE_TTL_SECONDS = int(os.getenv("REPORT_CACHE_TTL_SECONDS", "300"))


def is_cacheable(body: ReportRequest) -> bool:
    """
    Whether a report request may be cached.

    Needs a collection_version. A custom period without an end date ends at
    "now", which moves with every request, so it is never cached.
    """
    if not body.collection_version:
        return False
    return not (body.period is PeriodFilter.CUSTOM and body.custom_end_date is None)


def report_cache_key(body: ReportRequest) -> str:
    """Cache key for a report request; only meaningful with a collection_version."""
    return make_cache_key(
        f"daily_report_{CACHE_VERSION}",
        version=body.collection_version,
        period=body.period.value,
        month=body.selected_month,
        year=body.selected_year,
        custom_start=body.custom_start_date,
        custom_end=body.custom_end_date,
        sort=f"{body.sort_column.value}:{body.sort_direction.value}",
        # Ranges anchored on "now" move at midnight
        today=today_local(),
    )


@router.post("/daily/data", response_model=FinancialReport)
async def get_daily_report(body: ReportRequest) -> FinancialReport:
    """
    Get the daily financial report for the posted collections and period.

    Returns one row per calendar day in range (idle days zero-filled) with the
    total row last, plus the revenue, cash-flow, production and inventory card
    groups. Revenue and cash-flow cards are derived from the total row.

    Args:
        body: Period selection, sort, optional collection_version and the
            sales, repair_orders, cash_transactions, production_orders,
            materials and products collections.

    Returns:
        FinancialReport
    """
    cache_key = None
    if is_cacheable(body):
        cache_key = report_cache_key(body)
        cached_result = get_cache(cache_key)
        if cached_result is not None:
            logger.info("report.cache_hit", collection_version=body.collection_version)
            return cached_result

    result = build_report(
        body,
        body,
        sort_column=body.sort_column,
        sort_direction=body.sort_direction,
    )

    if cache_key is not None:
        set_cache(cache_key, result, ttl_seconds=REPORT_CACHE_TTL_SECONDS)

    return result


@router.post("/daily/detail", response_model=DayDetail)
async def get_day_detail(body: DayDetailRequest) -> DayDetail:
    """
    Get the sales, repairs and cash transactions behind one report day.

    Returns 404 when date_key is not a day of the resolved range.
    """
    return build_day_detail(body, body, body.date_key)
