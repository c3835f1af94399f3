from enum import Enum

SHORT_TERM_MAX_DAYS = 3
MEDIUM_TERM_MAX_DAYS = 7


class DurationStrategy(Enum):
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


def select_strategy(total_days: int) -> DurationStrategy:
    if total_days <= SHORT_TERM_MAX_DAYS:
        return DurationStrategy.SHORT_TERM
    if total_days <= MEDIUM_TERM_MAX_DAYS:
        return DurationStrategy.MEDIUM_TERM
    return DurationStrategy.LONG_TERM
