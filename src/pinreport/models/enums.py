"""
Enums for domain models.
Enums provide type safety and clarity. Validation for categorical fields.
"""

import enum


class PeriodFilter(str, enum.Enum):
    """Report period presets offered by the report screen."""

    TODAY = "today"
    SEVEN_DAYS = "7days"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"


class PaymentStatus(str, enum.Enum):
    """Repair order payment states."""

    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"


class TransactionType(str, enum.Enum):
    """Cash book direction."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionCategory(str, enum.Enum):
    """Cash transaction categories the report recognises.

    The category field on a transaction is free-form; values outside this
    list are reported as unmatched.
    """

    INVENTORY_PURCHASE = "inventory_purchase"
    OTHER_INCOME = "other_income"
    OTHER_EXPENSE = "other_expense"
    PAYROLL = "payroll"
    RENT = "rent"
    UTILITIES = "utilities"
    LOGISTICS = "logistics"


OPERATING_EXPENSE_CATEGORIES = frozenset(
    {
        TransactionCategory.OTHER_EXPENSE.value,
        TransactionCategory.PAYROLL.value,
        TransactionCategory.RENT.value,
        TransactionCategory.UTILITIES.value,
        TransactionCategory.LOGISTICS.value,
    }
)


class ProductionStatus(str, enum.Enum):
    """Production order states as stored by the production module."""

    WAITING = "Đang chờ"
    QUEUED = "Chờ sản xuất"
    NEW = "Mới"
    IN_PROGRESS = "Đang sản xuất"
    COMPLETED = "Hoàn thành"
    STOCKED = "Đã nhập kho"
    CANCELLED = "Đã hủy"


class SortColumn(str, enum.Enum):
    """Sortable columns of the daily report table."""

    DATE = "date"
    CAPITAL_COST = "capital_cost"
    SALES_REVENUE = "sales_revenue"
    SALES_COGS = "sales_cogs"
    REPAIR_MATERIAL_COST = "repair_material_cost"
    REPAIR_LABOR_COST = "repair_labor_cost"
    TOTAL_REVENUE = "total_revenue"
    SALES_PROFIT = "sales_profit"
    OTHER_INCOME = "other_income"
    OTHER_EXPENSE = "other_expense"
    NET_PROFIT = "net_profit"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"
