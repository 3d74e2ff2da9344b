"""
Offseason Onboarding Flow.

Decides where a user is in the registration wizard and what comes next.
Pure logic over a persisted progress record; no I/O happens in this package.

Pieces:
1. Steps - closed step enumeration and the fixed backbone order
2. Catalog - activities/goals that have detail screens, and their sub-flows
3. Checklist - next incomplete activity or goal, in selection order
4. Record - the progress record and the mutations screens apply to it
5. Resolver - resolve(record) -> next step
"""

from .catalog import ItemKind
from .checklist import ACTIVITY_TRACKER, GOAL_TRACKER, ChecklistTracker, next_incomplete
from .errors import (
    ItemNotSelectedError,
    OnboardingError,
    ScreenNotMappedError,
    StoreUnavailableError,
    UnknownStepError,
)
from .record import (
    ProgressRecord,
    complete_registration,
    completion_step,
    mark_item_complete,
    new_record,
    record_answers,
    record_step_reached,
    select_items,
)
from .resolver import Resolution, describe, onboarding_progress, resolve
from .steps import Branch, Step, next_linear_step

__all__ = [
    "ACTIVITY_TRACKER",
    "GOAL_TRACKER",
    "Branch",
    "ChecklistTracker",
    "ItemKind",
    "ItemNotSelectedError",
    "OnboardingError",
    "ProgressRecord",
    "Resolution",
    "ScreenNotMappedError",
    "Step",
    "StoreUnavailableError",
    "UnknownStepError",
    "complete_registration",
    "completion_step",
    "describe",
    "mark_item_complete",
    "new_record",
    "next_incomplete",
    "next_linear_step",
    "onboarding_progress",
    "record_answers",
    "record_step_reached",
    "resolve",
    "select_items",
]
