"""Turn the report screen's period selection into a concrete date range."""

from datetime import date, datetime, timedelta

from pinreport.core.errors import ValidationError
from pinreport.models.enums import PeriodFilter
from pinreport.models.report_schemas import DateRange
from pinreport.utils.datetime import end_of_day, now_local, start_of_day, to_local


def get_month_dates(year: int, month: int) -> tuple[date, date]:
    """
    Get the start and end dates for a month.

    Args:
        year: Year
        month: Month (1-12)

    Returns:
        Tuple of (start_date, end_date)
    """
    start_date = date(year, month, 1)
    if month == 12:
        end_date = date(year + 1, 1, 1) - timedelta(days=1)
    else:
        end_date = date(year, month + 1, 1) - timedelta(days=1)
    return start_date, end_date


def get_quarter_dates(year: int, month: int) -> tuple[date, date]:
    """Start and end dates of the quarter containing the given month."""
    quarter = (month - 1) // 3
    start_date, _ = get_month_dates(year, quarter * 3 + 1)
    _, end_date = get_month_dates(year, quarter * 3 + 3)
    return start_date, end_date


def _clamped(first_day: date, last_day: date, now: datetime) -> DateRange:
    """Range over whole days, never running past the end of today."""
    end = min(end_of_day(last_day), end_of_day(now.date()))
    return DateRange(start=start_of_day(first_day), end=end)


def resolve_period(
    period: PeriodFilter | str,
    selected_month: int | None = None,
    selected_year: int | None = None,
    custom_start_date: date | None = None,
    custom_end_date: date | None = None,
    now: datetime | None = None,
) -> DateRange:
    """
    Resolve a period filter to an inclusive [start, end] range.

    Args:
        period: today / 7days / month / quarter / year / custom
        selected_month: Anchor month for month/quarter (defaults to now's month)
        selected_year: Anchor year for month/quarter/year (defaults to now's year)
        custom_start_date: First day of a custom range (defaults to first of this month)
        custom_end_date: Last day of a custom range (defaults to now)
        now: Reference instant (defaults to the current local time)

    Returns:
        DateRange in the business timezone. It is empty (end < start) when the
        anchor lies entirely in the future.

    Raises:
        ValidationError: If selected_month is outside 1-12.
    """
    now = to_local(now) if now is not None else now_local()
    period = PeriodFilter(period)
    month = selected_month if selected_month is not None else now.month
    year = selected_year if selected_year is not None else now.year

    if not 1 <= month <= 12:
        raise ValidationError(
            "Selected month must be between 1 and 12",
            details={"selected_month": month},
        )

    today = now.date()

    if period is PeriodFilter.TODAY:
        return DateRange(start=start_of_day(today), end=end_of_day(today))

    if period is PeriodFilter.SEVEN_DAYS:
        return DateRange(start=start_of_day(today - timedelta(days=6)), end=end_of_day(today))

    if period is PeriodFilter.MONTH:
        return _clamped(*get_month_dates(year, month), now)

    if period is PeriodFilter.QUARTER:
        return _clamped(*get_quarter_dates(year, month), now)

    if period is PeriodFilter.YEAR:
        return _clamped(date(year, 1, 1), date(year, 12, 31), now)

    # custom
    start = (
        start_of_day(custom_start_date)
        if custom_start_date is not None
        else start_of_day(today.replace(day=1))
    )
    end = end_of_day(custom_end_date) if custom_end_date is not None else now
    return DateRange(start=start, end=end)
