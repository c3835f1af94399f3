from decimal import Decimal

from django.test import SimpleTestCase

from apps.planner.allocation_tables import (
    LONG_TERM_FIXED_DAYS,
    allocation_entries,
    long_term_allocation,
    long_term_extra_ratio,
    medium_term_allocation,
    short_term_allocation,
)
from apps.planner.exceptions import DegenerateAllocation
from apps.planner.strategy import DurationStrategy, select_strategy


def percents(entries):
    return [entry.percentage * 100 for entry in entries]


class SelectStrategyTest(SimpleTestCase):
    def test_tiers(self):
        for days in (1, 2, 3):
            self.assertEqual(select_strategy(days), DurationStrategy.SHORT_TERM)
        for days in (4, 5, 6, 7):
            self.assertEqual(select_strategy(days), DurationStrategy.MEDIUM_TERM)
        for days in (8, 18, 45, 365):
            self.assertEqual(select_strategy(days), DurationStrategy.LONG_TERM)


class ShortTermAllocationTest(SimpleTestCase):
    def test_one_day(self):
        entries = short_term_allocation(1)

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].name, 'day_1')
        self.assertEqual(entries[0].label, '單日爆發')
        self.assertEqual(percents(entries), [100])

    def test_two_days(self):
        entries = short_term_allocation(2)

        self.assertEqual([e.label for e in entries], ['首日衝刺', '收尾日'])
        self.assertEqual(percents(entries), [60, 40])

    def test_three_days(self):
        entries = short_term_allocation(3)

        self.assertEqual([e.name for e in entries], ['day_1', 'day_2', 'day_3'])
        self.assertEqual([e.label for e in entries], ['開場日', '主推日', '收尾日'])
        self.assertEqual(percents(entries), [50, 30, 20])
        self.assertTrue(all(e.days == 1 for e in entries))

    def test_no_table_beyond_three_days(self):
        with self.assertRaises(DegenerateAllocation):
            short_term_allocation(4)


class MediumTermAllocationTest(SimpleTestCase):
    def test_seven_days(self):
        entries = medium_term_allocation(7)

        self.assertEqual([e.name for e in entries], ['launch', 'main', 'final'])
        self.assertEqual(percents(entries), [45, 35, 20])
        self.assertEqual([e.days for e in entries], [3, 2, 2])

    def test_day_counts_cover_the_campaign(self):
        expected = {4: [2, 1, 1], 5: [2, 2, 1], 6: [3, 2, 1], 7: [3, 2, 2]}
        for days, split in expected.items():
            entries = medium_term_allocation(days)
            self.assertEqual([e.days for e in entries], split)
            self.assertEqual(sum(e.days for e in entries), days)


class LongTermAllocationTest(SimpleTestCase):
    def test_no_rebalancing_up_to_twenty_days(self):
        self.assertEqual(long_term_extra_ratio(18), 0)
        self.assertEqual(long_term_extra_ratio(20), 0)

        entries = long_term_allocation(20)
        self.assertEqual([e.name for e in entries], ['preheat', 'launch', 'main', 'final', 'repurchase'])
        self.assertEqual(percents(entries), [4, 32, 38, 24, 2])
        self.assertEqual([e.days for e in entries], [4, 3, 3, 3, 7])

    def test_rebalancing_shifts_budget_to_main(self):
        entries = long_term_allocation(25)

        # 5 extra days * 0.008 = 4 points moved into main
        self.assertEqual(percents(entries), [4, Decimal('29.6'), 42, Decimal('22.4'), 2])
        self.assertEqual(sum(e.percentage for e in entries), 1)

    def test_rebalancing_is_capped(self):
        self.assertEqual(long_term_extra_ratio(45), Decimal('0.20'))
        self.assertEqual(long_term_extra_ratio(120), Decimal('0.20'))

        entries = long_term_allocation(45)
        self.assertEqual(percents(entries), [4, 20, 58, 16, 2])
        self.assertEqual(sum(e.percentage for e in entries), 1)
        self.assertEqual(percents(long_term_allocation(120)), [4, 20, 58, 16, 2])

    def test_main_takes_the_remaining_days(self):
        for days in (18, 20, 31, 45, 90):
            entries = long_term_allocation(days)
            main = next(e for e in entries if e.name == 'main')
            self.assertEqual(main.days, days - LONG_TERM_FIXED_DAYS)
            self.assertEqual(sum(e.days for e in entries), days)

    def test_too_short_for_fixed_phases(self):
        for days in range(8, 18):
            with self.assertRaises(DegenerateAllocation) as ctx:
                long_term_allocation(days)
            self.assertEqual(ctx.exception.period_name, 'main')
            self.assertEqual(ctx.exception.days, days - LONG_TERM_FIXED_DAYS)


class AllocationEntriesTest(SimpleTestCase):
    def test_dispatches_on_strategy(self):
        self.assertEqual(len(allocation_entries(DurationStrategy.SHORT_TERM, 2)), 2)
        self.assertEqual(len(allocation_entries(DurationStrategy.MEDIUM_TERM, 5)), 3)
        self.assertEqual(len(allocation_entries(DurationStrategy.LONG_TERM, 30)), 5)
