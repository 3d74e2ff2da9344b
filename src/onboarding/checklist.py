"""
Checklist Tracker.

One generic tracker, instantiated once for activities and once for goals.
Given the user's selection (in the order they picked it) and the set of items
already marked complete, it finds the first item that still needs its detail
screen.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from .catalog import ACTIVITY_SCREEN_MAP, GOAL_SCREEN_MAP, ItemKind
from .steps import Step

logger = logging.getLogger(__name__)


def next_incomplete(
    selected: Sequence[str],
    completed: Iterable[str],
    item_screen_map: Mapping[str, object],
) -> str | None:
    """
    First selected item that has a detail screen and is not complete.

    Selection order wins; completed entries that were never selected are
    ignored. Returns None when nothing is left.
    """
    done = set(completed)
    for item in selected:
        if item in item_screen_map and item not in done:
            return item
    return None


class ChecklistTracker:
    """Tracks one kind of dynamic item (activities or goals)."""

    def __init__(self, kind: ItemKind, item_screens: Mapping[str, Step]):
        self.kind = kind
        self.item_screens = dict(item_screens)

    def __repr__(self) -> str:
        return f"ChecklistTracker(kind={self.kind.value!r}, items={list(self.item_screens)})"

    def tracked(self, selected: Sequence[str]) -> list[str]:
        """Selected items that have a detail screen, in selection order."""
        return [item for item in selected if item in self.item_screens]

    def untracked(self, selected: Sequence[str]) -> list[str]:
        """Selected items with no detail screen (complete once selected)."""
        return [item for item in selected if item not in self.item_screens]

    def next_incomplete(self, selected: Sequence[str], completed: Iterable[str]) -> str | None:
        completed = list(completed)
        stray = [item for item in completed if item not in selected]
        if stray:
            logger.warning(f"Ignoring {self.kind.value} entries marked complete but not selected: {stray}")
        return next_incomplete(selected, completed, self.item_screens)

    def screen_for(self, item: str) -> Step | None:
        return self.item_screens.get(item)

    def remaining(self, selected: Sequence[str], completed: Iterable[str]) -> list[str]:
        """Tracked items still waiting for their detail screens."""
        done = set(completed)
        return [item for item in self.tracked(selected) if item not in done]

    @staticmethod
    def mark_complete(completed: Sequence[str], item: str) -> tuple[str, ...]:
        """Add `item` to a completion list. Marking twice is a no-op."""
        if item in completed:
            return tuple(completed)
        return (*completed, item)


ACTIVITY_TRACKER = ChecklistTracker(ItemKind.ACTIVITY, ACTIVITY_SCREEN_MAP)
GOAL_TRACKER = ChecklistTracker(ItemKind.GOAL, GOAL_SCREEN_MAP)

_TRACKERS = {
    ItemKind.ACTIVITY: ACTIVITY_TRACKER,
    ItemKind.GOAL: GOAL_TRACKER,
}


def tracker_for(kind: ItemKind | str) -> ChecklistTracker:
    return _TRACKERS[ItemKind(kind)]
