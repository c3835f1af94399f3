# apps/planner/totals.py
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

from .exceptions import InvalidInput

HUNDRED = Decimal(100)
NUMERIC_FIELDS = ('target_revenue', 'target_aov', 'target_conversion_rate', 'cost_per_click')


def to_decimal(value):
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 0.1 keep their printed value
    return Decimal(str(value))


def ceil_decimal(value) -> int:
    return int(math.ceil(to_decimal(value)))


def ceil_div(numerator, denominator) -> int:
    return ceil_decimal(to_decimal(numerator) / to_decimal(denominator))


@dataclass(frozen=True)
class CampaignInputs:
    name: str
    start_date: date
    end_date: date
    target_revenue: Decimal
    target_aov: Decimal
    target_conversion_rate: Decimal
    cost_per_click: Decimal

    def __post_init__(self):
        for field in NUMERIC_FIELDS:
            try:
                value = to_decimal(getattr(self, field))
            except (InvalidOperation, TypeError, ValueError) as e:
                raise InvalidInput(field, f"must be a number, got {getattr(self, field)!r}") from e
            object.__setattr__(self, field, value)


@dataclass(frozen=True)
class CampaignTotals:
    total_days: int
    total_orders: int
    total_traffic: int
    total_budget: int


def validate_inputs(inputs: CampaignInputs):
    # NaN cannot be compared and infinity cannot be rounded
    for field in NUMERIC_FIELDS:
        if not getattr(inputs, field).is_finite():
            raise InvalidInput(field, 'must be a finite number')
    if inputs.target_revenue <= 0:
        raise InvalidInput('target_revenue', 'must be greater than 0')
    if inputs.target_aov <= 0:
        raise InvalidInput('target_aov', 'must be greater than 0')
    if inputs.target_conversion_rate <= 0 or inputs.target_conversion_rate > HUNDRED:
        raise InvalidInput('target_conversion_rate', 'must be in (0, 100]')
    if inputs.cost_per_click <= 0:
        raise InvalidInput('cost_per_click', 'must be greater than 0')
    if inputs.end_date < inputs.start_date:
        raise InvalidInput('end_date', 'must not be before start_date')


def campaign_days(start_date: date, end_date: date) -> int:
    return (end_date - start_date).days + 1


def calculate_totals(inputs: CampaignInputs) -> CampaignTotals:
    """
    Required orders, traffic and budget for the campaign target.

    Every step rounds up so the computed capacity always reaches the target.
    """
    validate_inputs(inputs)

    total_orders = ceil_decimal(inputs.target_revenue / inputs.target_aov)
    total_traffic = ceil_decimal(total_orders / (inputs.target_conversion_rate / HUNDRED))
    total_budget = ceil_decimal(total_traffic * inputs.cost_per_click)

    return CampaignTotals(
        total_days=campaign_days(inputs.start_date, inputs.end_date),
        total_orders=total_orders,
        total_traffic=total_traffic,
        total_budget=total_budget,
    )
