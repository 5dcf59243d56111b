"""Domain models for the report engine."""

from pinreport.models.enums import (
    PaymentStatus,
    PeriodFilter,
    SortColumn,
    SortDirection,
    TransactionCategory,
    TransactionType,
)
from pinreport.models.records import (
    CashTransaction,
    Material,
    Product,
    ProductionOrder,
    RepairMaterial,
    RepairOrder,
    Sale,
    SaleItem,
)

__all__ = [
    "CashTransaction",
    "Material",
    "PaymentStatus",
    "PeriodFilter",
    "Product",
    "ProductionOrder",
    "RepairMaterial",
    "RepairOrder",
    "Sale",
    "SaleItem",
    "SortColumn",
    "SortDirection",
    "TransactionCategory",
    "TransactionType",
]
