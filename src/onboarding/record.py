"""
Progress Record and Mutation API.

The record is what the Profile Store persists per user. It is immutable here:
every mutation returns a new record and the caller decides when to save it.

Storage layout (profiles row):
    onboarding_step            -> current_step
    selected_activities        -> selected_activities
    registration_completed_at  -> registration_completed_at
    onboarding_data            -> detail_payload, plus the reserved keys
                                  selected_goals, _completed_activities,
                                  _completed_goals
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .catalog import ItemKind, get_item_detail
from .checklist import ChecklistTracker
from .errors import ItemNotSelectedError
from .steps import Step, parse_step

SELECTED_GOALS_KEY = "selected_goals"
COMPLETED_ACTIVITIES_KEY = "_completed_activities"
COMPLETED_GOALS_KEY = "_completed_goals"

_RESERVED_KEYS = {SELECTED_GOALS_KEY, COMPLETED_ACTIVITIES_KEY, COMPLETED_GOALS_KEY}


def _ordered_unique(items) -> tuple[str, ...]:
    seen = []
    for item in items or ():
        if item not in seen:
            seen.append(item)
    return tuple(seen)


@dataclass(frozen=True)
class ProgressRecord:
    """
    Onboarding progress for one user.

    current_step is kept as the raw persisted token; it is only interpreted
    by the resolver so that a corrupt value surfaces as UnknownStepError there.
    """
    user_id: str
    current_step: str | None = None
    selected_activities: tuple[str, ...] = ()
    selected_goals: tuple[str, ...] = ()
    completed_activities: tuple[str, ...] = ()
    completed_goals: tuple[str, ...] = ()
    detail_payload: dict[str, Any] = field(default_factory=dict)
    registration_completed_at: str | None = None

    @property
    def is_registered(self) -> bool:
        return bool(self.registration_completed_at)

    def selected_for(self, kind: ItemKind | str) -> tuple[str, ...]:
        if ItemKind(kind) is ItemKind.ACTIVITY:
            return self.selected_activities
        return self.selected_goals

    def completed_for(self, kind: ItemKind | str) -> tuple[str, ...]:
        if ItemKind(kind) is ItemKind.ACTIVITY:
            return self.completed_activities
        return self.completed_goals

    def answers_for(self, key: str) -> dict:
        """Answers stored under `key`; empty dict if missing or not a dict."""
        value = self.detail_payload.get(key)
        return value if isinstance(value, dict) else {}

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    @classmethod
    def from_profile(cls, row: dict) -> "ProgressRecord":
        """Build a record from a profiles row."""
        data = dict(row.get("onboarding_data") or {})
        return cls(
            user_id=row.get("id") or row.get("user_id") or "",
            current_step=row.get("onboarding_step"),
            selected_activities=_ordered_unique(row.get("selected_activities")),
            selected_goals=_ordered_unique(data.get(SELECTED_GOALS_KEY)),
            completed_activities=_ordered_unique(data.get(COMPLETED_ACTIVITIES_KEY)),
            completed_goals=_ordered_unique(data.get(COMPLETED_GOALS_KEY)),
            detail_payload={k: v for k, v in data.items() if k not in _RESERVED_KEYS},
            registration_completed_at=row.get("registration_completed_at"),
        )

    def to_profile_update(self) -> dict:
        """Columns to write back to the profiles row."""
        onboarding_data = {
            **self.detail_payload,
            SELECTED_GOALS_KEY: list(self.selected_goals),
            COMPLETED_ACTIVITIES_KEY: list(self.completed_activities),
            COMPLETED_GOALS_KEY: list(self.completed_goals),
        }
        return {
            "onboarding_step": self.current_step,
            "selected_activities": list(self.selected_activities),
            "onboarding_data": onboarding_data,
            "registration_completed_at": self.registration_completed_at,
        }


def new_record(user_id: str) -> ProgressRecord:
    """Record for a user who has not started onboarding."""
    return ProgressRecord(user_id=user_id)


# =============================================================================
# Mutation API
# =============================================================================


def record_step_reached(record: ProgressRecord, step: Step | str) -> ProgressRecord:
    """Set current_step. Unknown tokens are rejected before they are persisted."""
    step = parse_step(step)
    if record.current_step == step.value:
        return record
    return replace(record, current_step=step.value)


def mark_item_complete(record: ProgressRecord, kind: ItemKind | str, item: str) -> ProgressRecord:
    """
    Add `item` to the completed set for `kind`.

    Returns the same record if the item is already complete. The item must be
    part of the user's selection.
    """
    kind = ItemKind(kind)
    if item not in record.selected_for(kind):
        raise ItemNotSelectedError(kind.value, item)

    completed = record.completed_for(kind)
    updated = ChecklistTracker.mark_complete(completed, item)
    if updated == completed:
        return record

    if kind is ItemKind.ACTIVITY:
        return replace(record, completed_activities=updated)
    return replace(record, completed_goals=updated)


def completion_step(kind: ItemKind | str, item: str) -> Step | None:
    """Marker step for a finished item, or None if the item has no detail screen."""
    detail = get_item_detail(ItemKind(kind), item)
    return detail.completed_step if detail else None


def record_answers(record: ProgressRecord, key: str, answers: dict) -> ProgressRecord:
    """Merge a screen's answers into detail_payload[key]."""
    if key in _RESERVED_KEYS:
        raise ValueError(f"{key!r} is reserved for progress tracking")
    if not answers:
        return record
    merged = {**record.answers_for(key), **answers}
    return replace(record, detail_payload={**record.detail_payload, key: merged})


def select_items(
    record: ProgressRecord,
    activities: list[str] | None = None,
    goals: list[str] | None = None,
) -> ProgressRecord:
    """
    Store the user's activity and/or goal selection.

    Completion entries for items no longer selected are dropped so that
    completed stays a subset of selected.
    """
    changes: dict[str, Any] = {}
    if activities is not None:
        selected = _ordered_unique(activities)
        changes["selected_activities"] = selected
        changes["completed_activities"] = tuple(
            a for a in record.completed_activities if a in selected
        )
    if goals is not None:
        selected = _ordered_unique(goals)
        changes["selected_goals"] = selected
        changes["completed_goals"] = tuple(g for g in record.completed_goals if g in selected)
    return replace(record, **changes) if changes else record


def complete_registration(record: ProgressRecord, at: datetime | None = None) -> ProgressRecord:
    """Graduate the profile out of onboarding."""
    if record.is_registered:
        return record
    at = at or datetime.now(timezone.utc)
    return replace(
        record,
        current_step=Step.COMPLETE.value,
        registration_completed_at=at.isoformat(),
    )
