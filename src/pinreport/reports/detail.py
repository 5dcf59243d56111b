"""Records behind a single day of the report."""

from datetime import date

from pinreport.models.report_schemas import DayDetail
from pinreport.reports.filters import FilteredRecords
from pinreport.utils.datetime import local_date_key


def day_detail(date_key: date, filtered: FilteredRecords) -> DayDetail:
    """
    Re-filter the range's records down to one local calendar day.

    Uses the same local_date_key as the daily table, so the detail always
    sums to the row it expands.
    """
    return DayDetail(
        date_key=date_key,
        sales=[s for s in filtered.sales if local_date_key(s.date) == date_key],
        repairs=[r for r in filtered.repairs if local_date_key(r.creation_date) == date_key],
        transactions=[t for t in filtered.transactions if local_date_key(t.date) == date_key],
    )
