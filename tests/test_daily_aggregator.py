"""Tests for the daily report table."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from pinreport.models.enums import SortColumn, SortDirection
from pinreport.models.report_schemas import MONEY_FIELDS, RecordCollections
from pinreport.reports.daily import build_daily_report, classify_transaction, sort_rows
from pinreport.reports.filters import filter_records
from pinreport.reports.period import resolve_period
from tests.factories import CashTransactionFactory, RepairOrderFactory, SaleFactory


def custom_range(now, start: date, end: date):
    return resolve_period("custom", custom_start_date=start, custom_end_date=end, now=now)


def aggregate(now, collections: RecordCollections, start: date, end: date):
    rng = custom_range(now, start, end)
    return build_daily_report(filter_records(collections, rng), rng)


def mixed_collections() -> RecordCollections:
    """Ten days of varied activity, including idle days and odd categories."""
    sales, repairs, transactions = [], [], []
    for offset in range(10):
        day = date(2024, 3, 1) + timedelta(days=offset)
        if offset % 3 == 2:
            continue
        stamp = f"{day.isoformat()}T{8 + offset:02d}:15:00+07:00"
        sales.append(
            SaleFactory.build(
                date=stamp,
                total=120000 + offset * 1000,
                items=[
                    {"costPrice": 40000, "quantity": 2},
                    {"costPrice": 3333.33, "quantity": 3},
                ],
            )
        )
        repairs.append(
            RepairOrderFactory.build(
                creation_date=stamp,
                payment_status=["paid", "partial", "unpaid"][offset % 3],
                labor_cost=50000 + offset,
            )
        )
        transactions.extend(
            [
                CashTransactionFactory.build(date=stamp, type="income", category="other_income", amount=7000),
                CashTransactionFactory.build(date=stamp, type="expense", category="payroll", amount=-15000.5),
                CashTransactionFactory.build(date=stamp, type="expense", category="inventory_purchase", amount=90000),
                CashTransactionFactory.build(date=stamp, type="income", category="sale_payment", amount=1),
            ]
        )
    return RecordCollections(sales=sales, repair_orders=repairs, cash_transactions=transactions)


class TestDailyRows:
    """Test row generation and worked single-day scenarios."""

    def test_single_sale_day(self, now):
        report = aggregate(
            now,
            RecordCollections(
                sales=[
                    SaleFactory.build(
                        date="2024-03-15T09:30:00+07:00",
                        total=100000,
                        items=[{"costPrice": 60000, "quantity": 1}],
                    )
                ]
            ),
            date(2024, 3, 15),
            date(2024, 3, 15),
        )

        assert len(report.rows) == 1
        row = report.rows[0]
        assert row.date_key == date(2024, 3, 15)
        assert row.date_formatted == "15/03/2024"
        assert row.sales_revenue == Decimal("100000")
        assert row.sales_cogs == Decimal("60000")
        assert row.sales_profit == Decimal("40000")
        assert row.net_profit == Decimal("40000")
        assert row.total_revenue == Decimal("100000")

    def test_rent_expense_reduces_net_profit(self, now):
        report = aggregate(
            now,
            RecordCollections(
                sales=[SaleFactory.build(total=100000, items=[{"costPrice": 60000, "quantity": 1}])],
                cash_transactions=[
                    CashTransactionFactory.build(type="expense", category="rent", amount=-20000)
                ],
            ),
            date(2024, 3, 15),
            date(2024, 3, 15),
        )

        row = report.rows[0]
        assert row.other_expense == Decimal("20000")
        assert row.net_profit == Decimal("20000")

    def test_idle_days_are_zero_filled(self, now):
        report = aggregate(now, RecordCollections(), date(2024, 3, 1), date(2024, 3, 3))

        assert [r.date_key for r in report.rows] == [
            date(2024, 3, 1),
            date(2024, 3, 2),
            date(2024, 3, 3),
        ]
        for row in [*report.rows, report.total]:
            for name in MONEY_FIELDS:
                assert getattr(row, name) == 0
        assert report.total.is_total
        assert len(report.display_rows()) == 4

    def test_unpaid_repair_counts_toward_labor(self, now):
        """Repairs are included whatever their payment status."""
        report = aggregate(
            now,
            RecordCollections(
                repair_orders=[
                    RepairOrderFactory.build(
                        payment_status="unpaid",
                        labor_cost=150000,
                        materials=[{"materialName": "Cell", "price": 50000, "quantity": 2}],
                    )
                ]
            ),
            date(2024, 3, 15),
            date(2024, 3, 15),
        )

        row = report.rows[0]
        assert row.repair_labor_cost == Decimal("150000")
        assert row.repair_material_cost == Decimal("100000")
        assert row.total_revenue == Decimal("150000")
        # Repair figures stay out of net profit
        assert row.net_profit == 0

    def test_missing_labor_cost_defaults_to_zero(self, now):
        report = aggregate(
            now,
            RecordCollections(repair_orders=[RepairOrderFactory.build(labor_cost=None, materials=[])]),
            date(2024, 3, 15),
            date(2024, 3, 15),
        )

        assert report.rows[0].repair_labor_cost == 0

    def test_sale_without_items_has_no_cogs(self, now):
        report = aggregate(
            now,
            RecordCollections(sales=[SaleFactory.build(total=50000, items=[])]),
            date(2024, 3, 15),
            date(2024, 3, 15),
        )

        assert report.rows[0].sales_cogs == 0
        assert report.rows[0].sales_profit == Decimal("50000")

    def test_empty_range_has_no_rows(self, now):
        rng = resolve_period("month", selected_month=7, selected_year=2024, now=now)
        report = build_daily_report(filter_records(RecordCollections(), rng), rng)

        assert report.rows == []
        assert report.display_rows() == []
        assert report.total.is_total
        assert report.total.net_profit == 0


class TestLocalDateBucketing:
    """Records land on their business-local calendar day, not the UTC day."""

    def test_utc_evening_belongs_to_next_local_day(self, now):
        report = aggregate(
            now,
            RecordCollections(sales=[SaleFactory.build(date="2024-03-15T17:30:00Z", total=1000, items=[])]),
            date(2024, 3, 15),
            date(2024, 3, 16),
        )

        by_day = {r.date_key: r for r in report.rows}
        assert by_day[date(2024, 3, 15)].sales_revenue == 0
        assert by_day[date(2024, 3, 16)].sales_revenue == Decimal("1000")

    def test_early_local_morning_not_moved_to_previous_day(self, now):
        # 06:00 local is 23:00 UTC the day before
        report = aggregate(
            now,
            RecordCollections(sales=[SaleFactory.build(date="2024-03-16T06:00:00+07:00", total=1000, items=[])]),
            date(2024, 3, 15),
            date(2024, 3, 16),
        )

        by_day = {r.date_key: r for r in report.rows}
        assert by_day[date(2024, 3, 15)].sales_revenue == 0
        assert by_day[date(2024, 3, 16)].sales_revenue == Decimal("1000")

    def test_naive_timestamps_are_local(self, now):
        report = aggregate(
            now,
            RecordCollections(sales=[SaleFactory.build(date="2024-03-15T23:59:00", total=1000, items=[])]),
            date(2024, 3, 15),
            date(2024, 3, 16),
        )

        assert report.rows[0].sales_revenue == Decimal("1000")


class TestTransactionClassification:
    """Test routing cash transactions to columns."""

    @pytest.mark.parametrize(
        "type_,category,column",
        [
            ("expense", "inventory_purchase", "capital_cost"),
            ("income", "inventory_purchase", "capital_cost"),
            ("income", "other_income", "other_income"),
            ("expense", "other_expense", "other_expense"),
            ("expense", "payroll", "other_expense"),
            ("expense", "rent", "other_expense"),
            ("expense", "utilities", "other_expense"),
            ("expense", "logistics", "other_expense"),
            ("income", "rent", None),
            ("expense", "other_income", None),
            ("income", "sale_payment", None),
            ("expense", None, None),
        ],
    )
    def test_classify(self, type_, category, column):
        tx = CashTransactionFactory.build(type=type_, category=category)

        assert classify_transaction(tx) == column

    def test_amount_magnitude_used(self, now):
        report = aggregate(
            now,
            RecordCollections(
                cash_transactions=[
                    CashTransactionFactory.build(type="income", category="other_income", amount=-5000),
                    CashTransactionFactory.build(type="income", category="other_income", amount=3000),
                ]
            ),
            date(2024, 3, 15),
            date(2024, 3, 15),
        )

        assert report.rows[0].other_income == Decimal("8000")

    def test_unmatched_transactions_reported(self, now):
        report = aggregate(
            now,
            RecordCollections(
                cash_transactions=[
                    CashTransactionFactory.build(id="odd", type="income", category="sale_payment", amount=999),
                    CashTransactionFactory.build(id="rent", type="expense", category="rent", amount=-1),
                ]
            ),
            date(2024, 3, 15),
            date(2024, 3, 15),
        )

        assert report.unmatched_transactions == ["odd"]
        assert report.rows[0].other_expense == Decimal("1")
        assert report.rows[0].other_income == 0


class TestReconciliation:
    """Invariants over a mixed multi-day dataset."""

    def test_one_row_per_day(self, now):
        report = aggregate(now, mixed_collections(), date(2024, 3, 1), date(2024, 3, 12))

        assert len(report.rows) == report.date_range.day_count == 12
        assert len({r.date_key for r in report.rows}) == 12

    def test_total_row_is_exact_column_sum(self, now):
        report = aggregate(now, mixed_collections(), date(2024, 3, 1), date(2024, 3, 12))

        for name in MONEY_FIELDS:
            assert getattr(report.total, name) == sum(getattr(r, name) for r in report.rows)

    def test_row_formulas_hold(self, now):
        report = aggregate(now, mixed_collections(), date(2024, 3, 1), date(2024, 3, 12))

        for row in [*report.rows, report.total]:
            assert row.sales_profit == row.sales_revenue - row.sales_cogs
            assert row.net_profit == row.sales_profit + row.other_income - row.other_expense
            assert row.total_revenue == row.sales_revenue + row.repair_labor_cost

    def test_unmatched_collected_across_days(self, now):
        report = aggregate(now, mixed_collections(), date(2024, 3, 1), date(2024, 3, 12))

        # 7 active days, one sale_payment each
        assert len(report.unmatched_transactions) == 7

    def test_idempotent(self, now):
        collections = mixed_collections()

        first = aggregate(now, collections, date(2024, 3, 1), date(2024, 3, 12))
        second = aggregate(now, collections, date(2024, 3, 1), date(2024, 3, 12))

        assert [r.model_dump_json() for r in first.display_rows()] == [
            r.model_dump_json() for r in second.display_rows()
        ]


class TestSortRows:
    """Test display sorting with the total row pinned last."""

    @pytest.fixture
    def report(self, now):
        return aggregate(now, mixed_collections(), date(2024, 3, 1), date(2024, 3, 10))

    def test_default_is_date_ascending(self, report):
        rows = report.display_rows()

        keys = [r.date_key for r in rows[:-1]]
        assert keys == sorted(keys)
        assert rows[-1].is_total

    def test_date_descending_keeps_total_last(self, report):
        rows = report.display_rows(SortColumn.DATE, SortDirection.DESC)

        keys = [r.date_key for r in rows[:-1]]
        assert keys == sorted(keys, reverse=True)
        assert rows[-1].is_total

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    @pytest.mark.parametrize("column", [c.value for c in SortColumn if c is not SortColumn.DATE])
    def test_numeric_columns(self, report, column, direction):
        rows = report.display_rows(column, direction)

        values = [getattr(r, column) for r in rows[:-1]]
        assert values == sorted(values, reverse=direction == "desc")
        assert rows[-1].is_total
        assert sum(1 for r in rows if r.is_total) == 1

    def test_ties_keep_date_order(self, report):
        rows = sort_rows(report.rows, "capital_cost", "desc")

        idle = [r.date_key for r in rows if r.capital_cost == 0]
        assert idle == sorted(idle)

    def test_sort_does_not_mutate_input(self, report):
        before = list(report.rows)

        sort_rows(report.rows, "net_profit", "desc")

        assert report.rows == before
