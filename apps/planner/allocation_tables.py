# apps/planner/allocation_tables.py
"""
Budget share and length of each campaign period, per duration strategy.

Percentages are fractions of the campaign total (``Decimal("0.45")`` is 45%).
"""
import math
from dataclasses import dataclass
from decimal import Decimal

from .exceptions import DegenerateAllocation
from .strategy import DurationStrategy

SHORT_TERM_TABLES = {
    1: (
        ('單日爆發', Decimal('1.00')),
    ),
    2: (
        ('首日衝刺', Decimal('0.60')),
        ('收尾日', Decimal('0.40')),
    ),
    3: (
        ('開場日', Decimal('0.50')),
        ('主推日', Decimal('0.30')),
        ('收尾日', Decimal('0.20')),
    ),
}

MEDIUM_TERM_DAY_RATIO = Decimal('0.4')

# Long campaigns move budget into "main" once they run past this many days
LONG_TERM_REBALANCE_AFTER_DAYS = 20
LONG_TERM_RATIO_PER_EXTRA_DAY = Decimal('0.008')
LONG_TERM_MAX_EXTRA_RATIO = Decimal('0.20')

PREHEAT_DAYS = 4
LAUNCH_DAYS = 3
FINAL_DAYS = 3
REPURCHASE_DAYS = 7
LONG_TERM_FIXED_DAYS = PREHEAT_DAYS + LAUNCH_DAYS + FINAL_DAYS + REPURCHASE_DAYS


@dataclass(frozen=True)
class AllocationEntry:
    name: str
    label: str
    percentage: Decimal
    days: int


def short_term_allocation(total_days):
    if total_days not in SHORT_TERM_TABLES:
        raise DegenerateAllocation('short_term', total_days,
                                   f"no short-term table for {total_days} day(s)")
    return [
        AllocationEntry(name=f"day_{index}", label=label, percentage=percentage, days=1)
        for index, (label, percentage) in enumerate(SHORT_TERM_TABLES[total_days], start=1)
    ]


def medium_term_allocation(total_days):
    launch_days = math.ceil(total_days * MEDIUM_TERM_DAY_RATIO)
    main_days = math.floor(total_days * MEDIUM_TERM_DAY_RATIO)
    return _checked([
        AllocationEntry('launch', '啟動期', Decimal('0.45'), launch_days),
        AllocationEntry('main', '主推期', Decimal('0.35'), main_days),
        AllocationEntry('final', '收尾期', Decimal('0.20'), total_days - launch_days - main_days),
    ])


def long_term_extra_ratio(total_days):
    extra_days = max(0, total_days - LONG_TERM_REBALANCE_AFTER_DAYS)
    return min(LONG_TERM_MAX_EXTRA_RATIO, extra_days * LONG_TERM_RATIO_PER_EXTRA_DAY)


def long_term_allocation(total_days):
    """
    Five phases; the share shifted into "main" is taken 60/40 from launch and final.

    The fixed phases use 17 days, so anything shorter than 18 days leaves
    "main" without days and raises DegenerateAllocation.
    """
    extra_ratio = long_term_extra_ratio(total_days)
    return _checked([
        AllocationEntry('preheat', '預熱期', Decimal('0.04'), PREHEAT_DAYS),
        AllocationEntry('launch', '啟動期', Decimal('0.32') - extra_ratio * Decimal('0.6'), LAUNCH_DAYS),
        AllocationEntry('main', '主推期', Decimal('0.38') + extra_ratio, total_days - LONG_TERM_FIXED_DAYS),
        AllocationEntry('final', '收尾期', Decimal('0.24') - extra_ratio * Decimal('0.4'), FINAL_DAYS),
        AllocationEntry('repurchase', '回購期', Decimal('0.02'), REPURCHASE_DAYS),
    ])


def allocation_entries(strategy, total_days):
    tables = {
        DurationStrategy.SHORT_TERM: short_term_allocation,
        DurationStrategy.MEDIUM_TERM: medium_term_allocation,
        DurationStrategy.LONG_TERM: long_term_allocation,
    }
    return tables[strategy](total_days)


def _checked(entries):
    for entry in entries:
        if entry.days <= 0:
            raise DegenerateAllocation(entry.name, entry.days)
    return entries
