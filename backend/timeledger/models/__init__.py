from timeledger.models.category import Category
from timeledger.models.scheduled_block import ScheduledBlock
from timeledger.models.block_validation import BlockValidation, OmissionReason
from timeledger.models.rules import RestRule, UsageLimit
from timeledger.models.violation import RoutineViolation
from timeledger.models.goal import MonthlyGoal, WeeklyGoal
from timeledger.models.template import AppliedTemplate, TemplateBlock, WeeklyTemplate
from timeledger.models.time_entry import TimeEntry
from timeledger.models.streak import UserStreak

__all__ = [
    "Category",
    "ScheduledBlock",
    "BlockValidation",
    "OmissionReason",
    "RestRule",
    "UsageLimit",
    "RoutineViolation",
    "MonthlyGoal",
    "WeeklyGoal",
    "WeeklyTemplate",
    "TemplateBlock",
    "AppliedTemplate",
    "TimeEntry",
    "UserStreak",
]
