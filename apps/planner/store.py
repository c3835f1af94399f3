# apps/planner/store.py
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import wraps
from typing import List, Optional

from django.db import DatabaseError, OperationalError, transaction
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .exceptions import InvalidInput, StoreFailure
from .models import CampaignPeriod, CampaignPlan, DailyBudget
from .totals import ceil_decimal

logger = logging.getLogger(__name__)

SLOW_STORE_CALL_SECONDS = 1.0
# PositiveIntegerField upper bound on every supported backend
COUNT_LIMIT = 2147483647


@dataclass
class StoredPlan:
    campaign: CampaignPlan
    periods: List[CampaignPeriod]
    daily_budgets: List[DailyBudget]


class PlanStore(ABC):
    """Persistence for campaign plans. Identifiers are assigned here, never by the engine."""

    @abstractmethod
    def atomic(self):
        pass

    @abstractmethod
    def create_campaign(self, user_id, inputs, totals) -> CampaignPlan:
        pass

    @abstractmethod
    def create_periods(self, campaign_id, period_drafts) -> List[CampaignPeriod]:
        pass

    @abstractmethod
    def create_daily_budgets(self, campaign_id, daily_drafts) -> List[DailyBudget]:
        pass

    @abstractmethod
    def get_plan(self, campaign_id, user_id) -> Optional[StoredPlan]:
        pass

    @abstractmethod
    def list_plans(self, user_id) -> List[CampaignPlan]:
        pass

    @abstractmethod
    def delete_plan(self, campaign_id, user_id) -> bool:
        pass


def store_call(func):
    """Time the call and surface database errors as StoreFailure"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            return func(*args, **kwargs)
        except (DatabaseError, InvalidOperation) as e:
            logger.error(f"Plan store failure in {func.__name__}: {e}")
            raise StoreFailure(f"{func.__name__} failed: {e}") from e
        finally:
            execution_time = time.time() - start_time
            if execution_time > SLOW_STORE_CALL_SECONDS:
                logger.warning(f"Slow store call: {func.__name__} took {execution_time:.2f}s")
    return wrapper


retry_reads = retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)


def describe_plan(inputs, totals):
    return f"目標營收: {inputs.target_revenue:,.0f}，預計{totals.total_days}天活動"


def decimal_limit(model, field_name):
    field = model._meta.get_field(field_name)
    return Decimal(10) ** (field.max_digits - field.decimal_places)


def check_storable(inputs, totals):
    """Reject plans whose figures overflow the plan columns"""
    amounts = [
        ('target_revenue', inputs.target_revenue),
        ('target_aov', inputs.target_aov),
        ('cost_per_click', inputs.cost_per_click),
        ('total_budget', totals.total_budget),
    ]
    for field_name, value in amounts:
        # expected revenue and budgets are rounded up, so compare the ceiling
        if ceil_decimal(value) >= decimal_limit(CampaignPlan, field_name):
            raise InvalidInput(field_name, f"{value} is too large to store")

    for field_name in ('total_traffic', 'total_orders'):
        if getattr(totals, field_name) > COUNT_LIMIT:
            raise InvalidInput(field_name, f"{getattr(totals, field_name)} is too large to store")


class DjangoPlanStore(PlanStore):
    def atomic(self):
        return transaction.atomic()

    @store_call
    def create_campaign(self, user_id, inputs, totals):
        check_storable(inputs, totals)
        return CampaignPlan.objects.create(
            user_id=user_id,
            name=inputs.name,
            description=describe_plan(inputs, totals),
            start_date=inputs.start_date,
            end_date=inputs.end_date,
            total_days=totals.total_days,
            target_revenue=inputs.target_revenue,
            target_aov=inputs.target_aov,
            target_conversion_rate=inputs.target_conversion_rate,
            cost_per_click=inputs.cost_per_click,
            total_budget=totals.total_budget,
            total_traffic=totals.total_traffic,
            total_orders=totals.total_orders,
            status='draft',
        )

    @store_call
    def create_periods(self, campaign_id, period_drafts):
        periods = [
            CampaignPeriod(
                campaign_id=campaign_id,
                name=draft.name,
                display_name=draft.label,
                order_index=draft.order_index,
                start_date=draft.start_date,
                end_date=draft.end_date,
                duration_days=draft.duration_days,
                budget_amount=draft.budget_amount,
                budget_percentage=draft.budget_percentage,
                daily_budget=draft.daily_budget,
                traffic_amount=draft.traffic_amount,
                traffic_percentage=draft.traffic_percentage,
                daily_traffic=draft.daily_traffic,
                expected_orders=draft.expected_orders,
                expected_revenue=draft.expected_revenue,
            )
            for draft in period_drafts
        ]
        # UUIDs are assigned client side, so bulk_create returns usable ids on every backend
        return CampaignPeriod.objects.bulk_create(periods)

    @store_call
    def create_daily_budgets(self, campaign_id, daily_drafts):
        missing = [draft.date for draft in daily_drafts if draft.period_id is None]
        if missing:
            raise ValueError(f"daily budgets without a period id: {missing}")

        rows = [
            DailyBudget(
                campaign_id=campaign_id,
                period_id=draft.period_id,
                date=draft.date,
                day_of_campaign=draft.day_of_campaign,
                budget=draft.budget,
                traffic=draft.traffic,
                expected_orders=draft.expected_orders,
                expected_revenue=draft.expected_revenue,
            )
            for draft in daily_drafts
        ]
        return DailyBudget.objects.bulk_create(rows)

    @store_call
    @retry_reads
    def get_plan(self, campaign_id, user_id):
        campaign = CampaignPlan.objects.filter(id=campaign_id, user_id=user_id).first()
        if campaign is None:
            return None
        return StoredPlan(
            campaign=campaign,
            periods=list(campaign.periods.order_by('order_index')),
            daily_budgets=list(campaign.daily_budgets.select_related('period').order_by('date')),
        )

    @store_call
    @retry_reads
    def list_plans(self, user_id):
        return list(CampaignPlan.objects.filter(user_id=user_id).order_by('-created_at'))

    @store_call
    def delete_plan(self, campaign_id, user_id):
        deleted, _ = CampaignPlan.objects.filter(id=campaign_id, user_id=user_id).delete()
        return deleted > 0
