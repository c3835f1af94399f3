# apps/planner/engine.py
import logging
from dataclasses import dataclass
from typing import Dict, List

from .allocation_tables import allocation_entries
from .daily import DailyBudgetDraft, distribute_daily
from .funnel import FunnelAllocation, allocate_funnels
from .periods import PeriodDraft, build_periods
from .strategy import DurationStrategy, select_strategy
from .totals import CampaignInputs, CampaignTotals, calculate_totals, ceil_div

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanSummary:
    total_budget: int
    total_traffic: int
    total_orders: int
    total_days: int
    avg_daily_budget: int
    avg_daily_traffic: int

    @classmethod
    def from_totals(cls, totals):
        return cls(
            total_budget=totals.total_budget,
            total_traffic=totals.total_traffic,
            total_orders=totals.total_orders,
            total_days=totals.total_days,
            avg_daily_budget=ceil_div(totals.total_budget, totals.total_days),
            avg_daily_traffic=ceil_div(totals.total_traffic, totals.total_days),
        )


@dataclass(frozen=True)
class AllocationResult:
    inputs: CampaignInputs
    totals: CampaignTotals
    strategy: DurationStrategy
    periods: List[PeriodDraft]
    daily_budgets: List[DailyBudgetDraft]
    funnel_allocations: Dict[str, FunnelAllocation]
    summary: PlanSummary


def allocate(inputs: CampaignInputs) -> AllocationResult:
    """Full budget plan for a campaign. Pure: same inputs, same plan."""
    totals = calculate_totals(inputs)
    strategy = select_strategy(totals.total_days)
    logger.debug(f"Campaign '{inputs.name}': {totals.total_days} days -> {strategy.value}")

    entries = allocation_entries(strategy, totals.total_days)
    periods = build_periods(totals, entries, inputs.start_date, inputs.target_revenue)
    daily_budgets = distribute_daily(periods)
    funnel_allocations = allocate_funnels(periods)

    logger.debug(
        f"Campaign '{inputs.name}': budget {totals.total_budget} over "
        f"{len(periods)} periods / {len(daily_budgets)} days"
    )
    return AllocationResult(
        inputs=inputs,
        totals=totals,
        strategy=strategy,
        periods=periods,
        daily_budgets=daily_budgets,
        funnel_allocations=funnel_allocations,
        summary=PlanSummary.from_totals(totals),
    )
