# apps/planner/periods.py
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from .exceptions import DegenerateAllocation
from .totals import HUNDRED, ceil_decimal, ceil_div


@dataclass(frozen=True)
class PeriodDraft:
    name: str
    label: str
    order_index: int
    start_date: date
    end_date: date
    duration_days: int
    budget_amount: int
    budget_percentage: Decimal
    traffic_amount: int
    traffic_percentage: Decimal
    daily_budget: int
    daily_traffic: int
    expected_orders: int
    expected_revenue: int

    def covers(self, day):
        return self.start_date <= day <= self.end_date


def build_periods(totals, entries, start_date, target_revenue):
    """Lay the allocation entries end to end from start_date"""
    planned_days = sum(entry.days for entry in entries)
    if planned_days != totals.total_days:
        raise DegenerateAllocation(
            'campaign', planned_days,
            f"periods cover {planned_days} day(s) but the campaign has {totals.total_days}"
        )

    periods = []
    current = start_date
    for index, entry in enumerate(entries):
        if entry.days <= 0:
            raise DegenerateAllocation(entry.name, entry.days)

        budget = ceil_decimal(totals.total_budget * entry.percentage)
        traffic = ceil_decimal(totals.total_traffic * entry.percentage)
        end = current + timedelta(days=entry.days - 1)

        periods.append(PeriodDraft(
            name=entry.name,
            label=entry.label,
            order_index=index,
            start_date=current,
            end_date=end,
            duration_days=entry.days,
            budget_amount=budget,
            budget_percentage=entry.percentage * HUNDRED,
            traffic_amount=traffic,
            traffic_percentage=entry.percentage * HUNDRED,
            daily_budget=ceil_div(budget, entry.days),
            daily_traffic=ceil_div(traffic, entry.days),
            expected_orders=ceil_decimal(totals.total_orders * entry.percentage),
            expected_revenue=ceil_decimal(target_revenue * entry.percentage),
        ))
        current = end + timedelta(days=1)

    return periods
