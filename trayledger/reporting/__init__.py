"""Mini README: Reporting helpers computing profit and loss on demand."""

from .reporter import (
    ReportSnapshot,
    build_report,
    expense_by_category,
    net_profit,
    orders_today,
    revenue,
    total_expenses,
)

__all__ = [
    "ReportSnapshot",
    "build_report",
    "expense_by_category",
    "net_profit",
    "orders_today",
    "revenue",
    "total_expenses",
]
