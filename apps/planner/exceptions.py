class PlannerError(Exception):
    """Base class for campaign planner errors"""


class InvalidInput(PlannerError):
    def __init__(self, field, message):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class DegenerateAllocation(PlannerError):
    """A period would end up with no days (or a day outside its range)"""

    def __init__(self, period_name, days, message=None):
        self.period_name = period_name
        self.days = days
        self.message = message or f"period '{period_name}' would last {days} day(s)"
        super().__init__(self.message)


class StoreFailure(PlannerError):
    """Raised by the plan store; the original database error is kept as __cause__"""
