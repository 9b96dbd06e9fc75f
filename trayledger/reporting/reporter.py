"""Mini README: Profit and loss figures derived from orders and expenses.

Structure:
    * revenue / total_expenses / net_profit - headline sums.
    * orders_today - number of orders dated today.
    * expense_by_category - per-category totals in first-seen order.
    * ReportSnapshot - every metric plus chart-ready label/value series.
    * build_report - compute a snapshot from the current collections.

All functions are pure and recomputed on each call; nothing is cached or
maintained incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..ledger.models import Expense, Order


def revenue(orders: Iterable[Order]) -> float:
    return sum((order.total_amount for order in orders), 0.0)


def total_expenses(expenses: Iterable[Expense]) -> float:
    return sum((expense.amount for expense in expenses), 0.0)


def net_profit(orders: Iterable[Order], expenses: Iterable[Expense]) -> float:
    return revenue(orders) - total_expenses(expenses)


def orders_today(orders: Iterable[Order], today: Optional[date] = None) -> int:
    """Count orders whose date matches ``today`` (defaults to the current date)."""

    reference = today or date.today()
    return sum(1 for order in orders if order.date == reference)


def expense_by_category(expenses: Iterable[Expense]) -> Dict[str, float]:
    """Sum expense amounts per category, keyed in order of first appearance."""

    totals: Dict[str, float] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
    return totals


@dataclass(slots=True)
class ReportSnapshot:
    """Aggregated metrics for the reporting view."""

    revenue: float
    total_expenses: float
    net_profit: float
    orders_today: int
    order_count: int
    expense_by_category: Dict[str, float] = field(default_factory=dict)

    @property
    def profitable(self) -> bool:
        return self.net_profit >= 0

    def expense_chart_series(self) -> Tuple[List[str], List[float]]:
        """Labels and values for the expense-by-category chart."""

        return list(self.expense_by_category.keys()), list(self.expense_by_category.values())

    def profit_chart_series(self) -> Tuple[List[str], List[float]]:
        """Labels and values for the revenue versus expenses chart."""

        return ["Revenue", "Expenses", "Net Profit"], [
            self.revenue,
            self.total_expenses,
            self.net_profit,
        ]

    def as_dict(self) -> Dict[str, object]:
        expense_labels, expense_values = self.expense_chart_series()
        profit_labels, profit_values = self.profit_chart_series()
        return {
            "revenue": self.revenue,
            "total_expenses": self.total_expenses,
            "net_profit": self.net_profit,
            "profitable": self.profitable,
            "orders_today": self.orders_today,
            "order_count": self.order_count,
            "expense_by_category": dict(self.expense_by_category),
            "charts": {
                "expenses": {"labels": expense_labels, "values": expense_values},
                "profit": {"labels": profit_labels, "values": profit_values},
            },
        }


def build_report(
    orders: Sequence[Order],
    expenses: Sequence[Expense],
    *,
    today: Optional[date] = None,
) -> ReportSnapshot:
    """Compute every reporting metric from the given collections."""

    income = revenue(orders)
    costs = total_expenses(expenses)
    return ReportSnapshot(
        revenue=income,
        total_expenses=costs,
        net_profit=income - costs,
        orders_today=orders_today(orders, today),
        order_count=len(orders),
        expense_by_category=expense_by_category(expenses),
    )
