"""Pydantic schemas for the daily financial report."""

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pinreport.models.enums import PeriodFilter, SortColumn, SortDirection
from pinreport.models.records import (
    CashTransaction,
    Material,
    Product,
    ProductionOrder,
    RepairOrder,
    Sale,
)

ZERO = Decimal("0")

# Monetary columns of a DailyReportRow, in table order
MONEY_FIELDS: tuple[str, ...] = (
    "capital_cost",
    "sales_revenue",
    "sales_cogs",
    "repair_material_cost",
    "repair_labor_cost",
    "total_revenue",
    "sales_profit",
    "other_income",
    "other_expense",
    "net_profit",
)


class DateRange(BaseModel):
    """Resolved report range; both bounds inclusive and business-local."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    @property
    def day_count(self) -> int:
        """Inclusive number of calendar days; 0 for an empty range."""
        if self.is_empty:
            return 0
        return (self.end.date() - self.start.date()).days + 1

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


class DailyReportRow(BaseModel):
    """One line of the daily report table, or the synthetic total line."""

    model_config = ConfigDict(frozen=True)

    date_key: date_type | None = Field(..., description="Local calendar day; None on the total row")
    date_formatted: str = Field(..., description="Display label (dd/mm/yyyy or 'Tổng:')")
    capital_cost: Decimal = Field(default=ZERO, description="Inventory purchases (not an expense)")
    sales_revenue: Decimal = Field(default=ZERO, description="Sum of sale totals")
    sales_cogs: Decimal = Field(default=ZERO, description="Cost of goods sold")
    repair_material_cost: Decimal = Field(default=ZERO, description="Materials used in repairs")
    repair_labor_cost: Decimal = Field(default=ZERO, description="Repair labor charged")
    total_revenue: Decimal = Field(default=ZERO, description="Sales revenue + repair labor")
    sales_profit: Decimal = Field(default=ZERO, description="Sales revenue - COGS")
    other_income: Decimal = Field(default=ZERO, description="Other income")
    other_expense: Decimal = Field(default=ZERO, description="Operating expenses")
    net_profit: Decimal = Field(default=ZERO, description="Sales profit + other income - expenses")
    is_total: bool = False


class RevenueSummary(BaseModel):
    """Headline revenue cards, derived from the total row only."""

    sales_revenue: Decimal = ZERO
    repair_revenue: Decimal = ZERO
    total_revenue: Decimal = ZERO
    sales_cogs: Decimal = ZERO
    gross_profit: Decimal = ZERO
    operating_expenses: Decimal = ZERO
    inventory_purchases: Decimal = ZERO
    other_income: Decimal = ZERO
    total_cost: Decimal = ZERO
    net_profit: Decimal = ZERO
    profit_margin: Decimal = Field(default=ZERO, description="Net profit / total revenue, percent")


class CashflowSummary(BaseModel):
    """Cash-flow cards."""

    total_inflow: Decimal = ZERO
    total_outflow: Decimal = ZERO
    net_cashflow: Decimal = ZERO
    transaction_count: int = 0


class ProductionSummary(BaseModel):
    """Production cards over non-cancelled orders in range."""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
    total_cost: Decimal = ZERO


class InventorySummary(BaseModel):
    """Stock valuation cards (point in time, not range-filtered)."""

    materials_value: Decimal = ZERO
    products_value: Decimal = ZERO
    total_value: Decimal = ZERO
    materials_count: int = 0
    products_count: int = 0
    low_stock_materials: int = 0
    out_of_stock_products: int = 0


class DayDetail(BaseModel):
    """Records behind one expanded row of the daily table."""

    date_key: date_type
    sales: list[Sale] = Field(default_factory=list)
    repairs: list[RepairOrder] = Field(default_factory=list)
    transactions: list[CashTransaction] = Field(default_factory=list)


class PeriodRequest(BaseModel):
    """Period selection as made on the report screen."""

    period: PeriodFilter = PeriodFilter.MONTH
    selected_month: int | None = Field(None, ge=1, le=12, description="Anchor month (1-12)")
    selected_year: int | None = Field(None, ge=2000, le=2100, description="Anchor year")
    custom_start_date: date_type | None = None
    custom_end_date: date_type | None = None


class RecordCollections(BaseModel):
    """The raw collections a report is computed over."""

    sales: list[Sale] = Field(default_factory=list)
    repair_orders: list[RepairOrder] = Field(default_factory=list)
    cash_transactions: list[CashTransaction] = Field(default_factory=list)
    production_orders: list[ProductionOrder] = Field(default_factory=list)
    materials: list[Material] = Field(default_factory=list)
    products: list[Product] = Field(default_factory=list)


class ReportRequest(PeriodRequest, RecordCollections):
    """Request body for the daily report endpoint."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "period": "custom",
                "custom_start_date": "2024-03-15",
                "custom_end_date": "2024-03-15",
                "sales": [
                    {
                        "id": "s1",
                        "date": "2024-03-15T09:30:00+07:00",
                        "total": 100000,
                        "items": [{"name": "Pin 18650", "costPrice": 60000, "quantity": 1}],
                    }
                ],
                "cash_transactions": [
                    {
                        "id": "t1",
                        "date": "2024-03-15T18:00:00+07:00",
                        "type": "expense",
                        "category": "rent",
                        "amount": -20000,
                    }
                ],
            }
        }
    )

    sort_column: SortColumn = SortColumn.DATE
    sort_direction: SortDirection = SortDirection.ASC
    collection_version: str | None = Field(
        None, description="Opaque version of the collections; enables report caching"
    )


class DayDetailRequest(ReportRequest):
    """Request body for expanding one day of the report."""

    date_key: date_type = Field(..., description="Day to expand (YYYY-MM-DD)")


class FinancialReport(BaseModel):
    """Complete report payload: daily table plus the four card groups."""

    date_range: DateRange
    days_in_range: int
    rows: list[DailyReportRow] = Field(
        default_factory=list, description="Day rows in display order, total row last"
    )
    revenue: RevenueSummary
    cashflow: CashflowSummary
    production: ProductionSummary
    inventory: InventorySummary
    unmatched_transactions: list[str] = Field(
        default_factory=list, description="Ids of cash transactions no column accounts for"
    )
    recent_transactions: list[CashTransaction] = Field(
        default_factory=list, description="First cash transactions in range (cash-flow tab)"
    )
    production_orders: list[ProductionOrder] = Field(
        default_factory=list, description="First non-cancelled production orders in range"
    )
    skipped_records: int = Field(default=0, description="Records dropped for unreadable dates")

    @model_validator(mode="after")
    def total_row_is_last(self) -> "FinancialReport":
        totals = [i for i, row in enumerate(self.rows) if row.is_total]
        if totals and totals != [len(self.rows) - 1]:
            raise ValueError("total row must appear exactly once, last")
        return self
