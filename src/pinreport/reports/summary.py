"""Summary cards for the report screen.

Revenue and cash-flow cards are reductions over the daily table's total row,
never a second pass over raw records, so cards and table always agree.
Repair revenue is repair labor regardless of payment status; unpaid repairs
count.
"""

from decimal import Decimal
from typing import Iterable

from pinreport.models.enums import ProductionStatus
from pinreport.models.records import Material, Product, ProductionOrder
from pinreport.models.report_schemas import (
    CashflowSummary,
    DailyReportRow,
    InventorySummary,
    ProductionSummary,
    RevenueSummary,
)

ZERO = Decimal("0")

COMPLETED_STATUSES = frozenset({ProductionStatus.COMPLETED.value, ProductionStatus.STOCKED.value})
IN_PROGRESS_STATUSES = frozenset({ProductionStatus.IN_PROGRESS.value})
PENDING_STATUSES = frozenset(
    {
        ProductionStatus.QUEUED.value,
        ProductionStatus.NEW.value,
        ProductionStatus.WAITING.value,
    }
)

DEFAULT_LOW_STOCK_THRESHOLD = Decimal("10")


def calculate_margin(net_profit: Decimal, total_revenue: Decimal) -> Decimal:
    """
    Net profit as a percentage of revenue, one decimal place.

    Returns 0 when there is no revenue.
    """
    if total_revenue == 0:
        return Decimal("0.0")
    return (net_profit / total_revenue * 100).quantize(Decimal("0.1"))


def revenue_summary(total_row: DailyReportRow) -> RevenueSummary:
    """Headline revenue cards derived from the daily total row."""
    total_cost = total_row.sales_cogs + total_row.other_expense
    return RevenueSummary(
        sales_revenue=total_row.sales_revenue,
        repair_revenue=total_row.repair_labor_cost,
        total_revenue=total_row.total_revenue,
        sales_cogs=total_row.sales_cogs,
        gross_profit=total_row.sales_profit,
        operating_expenses=total_row.other_expense,
        inventory_purchases=total_row.capital_cost,
        other_income=total_row.other_income,
        total_cost=total_cost,
        net_profit=total_row.net_profit,
        profit_margin=calculate_margin(total_row.net_profit, total_row.total_revenue),
    )


def cashflow_summary(total_row: DailyReportRow, transaction_count: int) -> CashflowSummary:
    """Cash-flow cards: money in (revenue + other income) against money out."""
    inflow = total_row.total_revenue + total_row.other_income
    outflow = total_row.sales_cogs + total_row.other_expense
    return CashflowSummary(
        total_inflow=inflow,
        total_outflow=outflow,
        net_cashflow=inflow - outflow,
        transaction_count=transaction_count,
    )


def production_summary(orders: Iterable[ProductionOrder]) -> ProductionSummary:
    """Count production orders by stage and total their estimated cost."""
    orders = list(orders)
    return ProductionSummary(
        total=len(orders),
        completed=sum(1 for o in orders if o.status in COMPLETED_STATUSES),
        in_progress=sum(1 for o in orders if o.status in IN_PROGRESS_STATUSES),
        pending=sum(1 for o in orders if o.status in PENDING_STATUSES),
        total_cost=sum((o.total_cost for o in orders), ZERO),
    )


def inventory_summary(
    materials: Iterable[Material],
    products: Iterable[Product],
    low_stock_threshold: Decimal = DEFAULT_LOW_STOCK_THRESHOLD,
) -> InventorySummary:
    """Value current stock at cost and count low / out-of-stock items."""
    materials = list(materials)
    products = list(products)
    materials_value = sum((m.purchase_price * m.stock for m in materials), ZERO)
    products_value = sum((p.cost_price * p.stock for p in products), ZERO)
    return InventorySummary(
        materials_value=materials_value,
        products_value=products_value,
        total_value=materials_value + products_value,
        materials_count=len(materials),
        products_count=len(products),
        low_stock_materials=sum(1 for m in materials if m.stock < low_stock_threshold),
        out_of_stock_products=sum(1 for p in products if p.stock == 0),
    )
