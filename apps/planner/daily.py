# apps/planner/daily.py
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Any, Optional

from .exceptions import DegenerateAllocation
from .totals import ceil_div


@dataclass(frozen=True)
class DailyBudgetDraft:
    period_index: int
    date: date
    day_of_campaign: int
    budget: int
    traffic: int
    expected_orders: int
    expected_revenue: int
    period_id: Optional[Any] = None


def distribute_daily(periods):
    """One row per calendar day; every day of a period gets the same rounded-up share."""
    rows = []
    day_of_campaign = 1
    for period in periods:
        days = period.duration_days
        budget = ceil_div(period.budget_amount, days)
        traffic = ceil_div(period.traffic_amount, days)
        orders = ceil_div(period.expected_orders, days)
        revenue = ceil_div(period.expected_revenue, days)

        for offset in range(days):
            rows.append(DailyBudgetDraft(
                period_index=period.order_index,
                date=period.start_date + timedelta(days=offset),
                day_of_campaign=day_of_campaign,
                budget=budget,
                traffic=traffic,
                expected_orders=orders,
                expected_revenue=revenue,
            ))
            day_of_campaign += 1
    return rows


def bind_period_ids(rows, stored_periods):
    """
    Attach the store-assigned id of each row's period.

    Stored periods are matched on order_index; the row date must fall
    inside the matched period.
    """
    by_index = {period.order_index: period for period in stored_periods}
    bound = []
    for row in rows:
        period = by_index.get(row.period_index)
        if period is None:
            raise DegenerateAllocation(
                f"#{row.period_index}", 0, f"no stored period for index {row.period_index}"
            )
        if not period.start_date <= row.date <= period.end_date:
            raise DegenerateAllocation(
                period.name, period.duration_days,
                f"{row.date} is outside period '{period.name}' ({period.start_date} - {period.end_date})"
            )
        bound.append(replace(row, period_id=period.id))
    return bound
