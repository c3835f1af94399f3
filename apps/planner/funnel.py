# apps/planner/funnel.py
"""
Funnel breakdown of a period budget.

Stage and segment shares are fractions of the whole period budget, so every
absolute amount is ceil(period_budget * share). The percentage shown for a
segment is its share of the parent stage.
"""
import logging
from collections import namedtuple
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from .totals import HUNDRED, ceil_decimal

logger = logging.getLogger(__name__)

SEGMENT_PERCENT_STEP = Decimal('0.1')

StageSpec = namedtuple('StageSpec', ['key', 'share', 'segments', 'description'], defaults=((), None))

STAGE_LABELS = {
    'awareness': '觸及/互動/影觀',
    'traffic': '流量導引',
    'conversion': '轉換促成',
}

SEGMENT_LABELS = {
    'interests': '精準興趣標籤',
    'remarketing_l1': '再行銷第一層受眾',
    'remarketing_l2': '再行銷第二層受眾',
    'automated_broad': 'ASC 廣告',
    'repurchase_remarketing': '活動轉換受眾再行銷',
}

SEGMENT_DESCRIPTIONS = {
    'repurchase_remarketing': '僅針對活動檔期間有轉換的受眾做再行銷',
}

FUNNEL_TABLE = {
    'preheat': (
        StageSpec('awareness', Decimal('0.30'), description='擴大觸及面，累積潛在受眾'),
        StageSpec('traffic', Decimal('0.70'), (
            ('interests', Decimal('0.70')),
        )),
    ),
    'launch': (
        StageSpec('awareness', Decimal('0.10')),
        StageSpec('traffic', Decimal('0.20'), (
            ('interests', Decimal('0.10')),
            ('remarketing_l1', Decimal('0.10')),
        )),
        StageSpec('conversion', Decimal('0.70'), (
            ('remarketing_l1', Decimal('0.20')),
            ('remarketing_l2', Decimal('0.30')),
            ('automated_broad', Decimal('0.20')),
        )),
    ),
    'main': (
        StageSpec('awareness', Decimal('0.05')),
        StageSpec('traffic', Decimal('0.15'), (
            ('interests', Decimal('0.10')),
            ('remarketing_l1', Decimal('0.05')),
        )),
        StageSpec('conversion', Decimal('0.80'), (
            ('remarketing_l1', Decimal('0.10')),
            ('remarketing_l2', Decimal('0.40')),
            ('automated_broad', Decimal('0.30')),
        )),
    ),
    'final': (
        StageSpec('traffic', Decimal('0.05'), (
            ('remarketing_l1', Decimal('0.05')),
        )),
        StageSpec('conversion', Decimal('0.95'), (
            ('remarketing_l1', Decimal('0.10')),
            ('remarketing_l2', Decimal('0.45')),
            ('automated_broad', Decimal('0.40')),
        )),
    ),
    'repurchase': (
        StageSpec('conversion', Decimal('1.00'), (
            ('repurchase_remarketing', Decimal('1.00')),
        )),
    ),
}

# 1-3 day campaigns name their periods day_1, day_2, ...
DAY_PERIOD_STAGES = (
    StageSpec('awareness', Decimal('0.20')),
    StageSpec('traffic', Decimal('0.30')),
    StageSpec('conversion', Decimal('0.50')),
)
DAY_MARKERS = ('day_', '日')


@dataclass(frozen=True)
class FunnelSegment:
    key: str
    label: str
    percentage: Decimal
    budget: int
    description: Optional[str] = None


@dataclass(frozen=True)
class FunnelStage:
    key: str
    label: str
    percentage: Decimal
    budget: int
    segments: Tuple[FunnelSegment, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class FunnelAllocation:
    period_name: str
    period_budget: int
    stages: Tuple[FunnelStage, ...] = field(default_factory=tuple)

    def stage(self, key):
        return next((stage for stage in self.stages if stage.key == key), None)

    def as_dict(self):
        result = {}
        for stage in self.stages:
            entry = {
                'label': stage.label,
                'percentage': float(stage.percentage),
                'budget': stage.budget,
            }
            if stage.description:
                entry['description'] = stage.description
            if stage.segments:
                entry['breakdown'] = {
                    segment.key: _segment_dict(segment) for segment in stage.segments
                }
            result[stage.key] = entry
        return result


def _segment_dict(segment):
    data = {
        'label': segment.label,
        'percentage': float(segment.percentage),
        'budget': segment.budget,
    }
    if segment.description:
        data['description'] = segment.description
    return data


def stage_specs_for(period_name):
    if period_name in FUNNEL_TABLE:
        return FUNNEL_TABLE[period_name]
    if any(marker in period_name for marker in DAY_MARKERS):
        return DAY_PERIOD_STAGES
    return None


def allocate_funnel(period_name, period_budget):
    specs = stage_specs_for(period_name)
    if specs is None:
        logger.warning(f"No funnel table for period '{period_name}', leaving it unallocated")
        return FunnelAllocation(period_name=period_name, period_budget=period_budget)

    stages = tuple(_build_stage(spec, period_budget) for spec in specs)
    return FunnelAllocation(period_name=period_name, period_budget=period_budget, stages=stages)


def _build_stage(spec, period_budget):
    segments = tuple(
        FunnelSegment(
            key=key,
            label=SEGMENT_LABELS[key],
            percentage=(share / spec.share * HUNDRED).quantize(SEGMENT_PERCENT_STEP),
            budget=ceil_decimal(period_budget * share),
            description=SEGMENT_DESCRIPTIONS.get(key),
        )
        for key, share in spec.segments
    )
    return FunnelStage(
        key=spec.key,
        label=STAGE_LABELS[spec.key],
        percentage=spec.share * HUNDRED,
        budget=ceil_decimal(period_budget * spec.share),
        segments=segments,
        description=spec.description,
    )


def allocate_funnels(periods):
    """Funnel breakdown per period, keyed by period name"""
    return {period.name: allocate_funnel(period.name, int(period.budget_amount)) for period in periods}
