# apps/planner/services.py
import logging
from dataclasses import dataclass
from typing import Dict, List

from .daily import bind_period_ids
from .engine import PlanSummary, allocate
from .funnel import FunnelAllocation, allocate_funnels

logger = logging.getLogger(__name__)


@dataclass
class CreatedPlan:
    campaign: object
    periods: List[object]
    daily_budgets: List[object]
    funnel_allocations: Dict[str, FunnelAllocation]
    summary: PlanSummary


class PlanService:
    def __init__(self, store):
        self.store = store

    def create_plan(self, user_id, inputs):
        """
        Allocate the plan, then persist header, periods and daily rows.

        All three writes share one transaction, so a failure while writing
        daily rows leaves no periods behind. Store errors are not retried here.
        """
        result = allocate(inputs)

        with self.store.atomic():
            campaign = self.store.create_campaign(user_id, inputs, result.totals)
            periods = self.store.create_periods(campaign.id, result.periods)
            daily_rows = bind_period_ids(result.daily_budgets, periods)
            daily_budgets = self.store.create_daily_budgets(campaign.id, daily_rows)

        logger.info(
            f"Created plan {campaign.id} for user {user_id}: "
            f"{result.strategy.value}, {len(periods)} periods, budget {result.totals.total_budget}"
        )
        return CreatedPlan(
            campaign=campaign,
            periods=periods,
            daily_budgets=daily_budgets,
            funnel_allocations=result.funnel_allocations,
            summary=result.summary,
        )

    def get_plan(self, campaign_id, user_id):
        return self.store.get_plan(campaign_id, user_id)

    def list_plans(self, user_id):
        return self.store.list_plans(user_id)

    def delete_plan(self, campaign_id, user_id):
        deleted = self.store.delete_plan(campaign_id, user_id)
        if deleted:
            logger.info(f"Deleted plan {campaign_id} for user {user_id}")
        return deleted

    @staticmethod
    def funnel_for(stored_plan):
        """Funnel breakdown recomputed from persisted periods"""
        return allocate_funnels(stored_plan.periods)
