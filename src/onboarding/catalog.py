"""
Item Catalog - activities and goals that have their own detail screens.

Only items listed here are tracked by a checklist. Anything else the user can
select (Yoga, Sports, Walking, push-myself, ...) has no detail screen and is
complete the moment it is selected.
"""

from dataclasses import dataclass
from enum import Enum

from .steps import Step, SubFlow, SubStep


class ItemKind(str, Enum):
    """The two dynamic checklists."""
    ACTIVITY = "activity"
    GOAL = "goal"


@dataclass(frozen=True)
class ItemDetail:
    """Detail flow for one selectable item."""
    kind: ItemKind
    item: str
    payload_key: str        # Key in detail_payload holding this item's answers
    flow: SubFlow
    completed_step: Step    # Marker written once the item is done

    @property
    def first_step(self) -> Step:
        return self.flow.first_step


# =============================================================================
# Activities
# =============================================================================

# Selectable activities, in display order on the preferences screen
ACTIVITY_OPTIONS = [
    "Weightlifting",
    "Running",
    "Swimming",
    "Pilates",
    "Yoga",
    "Sports",
    "Walking",
    "Other",
]

_ACTIVITY_DETAILS = [
    ItemDetail(
        kind=ItemKind.ACTIVITY,
        item="Weightlifting",
        payload_key="weightlifting",
        flow=SubFlow((
            SubStep(Step.WEIGHTLIFTING_EQUIPMENT),
            SubStep(Step.WEIGHTLIFTING_MAXES),
        )),
        completed_step=Step.ACTIVITY_WEIGHTLIFTING_COMPLETED,
    ),
    ItemDetail(
        kind=ItemKind.ACTIVITY,
        item="Swimming",
        payload_key="swimming",
        flow=SubFlow((
            SubStep(Step.SWIMMING_STYLE),
            SubStep(Step.SWIMMING_EXAMPLE),
        )),
        completed_step=Step.ACTIVITY_SWIMMING_COMPLETED,
    ),
    ItemDetail(
        kind=ItemKind.ACTIVITY,
        item="Pilates",
        payload_key="pilates",
        flow=SubFlow((
            SubStep(Step.PILATES_MEMBERSHIP),
            SubStep(Step.PILATES_STUDIO, when=lambda a: a.get("membership") == "yes"),
        )),
        completed_step=Step.ACTIVITY_PILATES_COMPLETED,
    ),
    ItemDetail(
        kind=ItemKind.ACTIVITY,
        item="Running",
        payload_key="running",
        flow=SubFlow((
            SubStep(Step.RUNNING_STYLE),
            # Interval runners (and "both") describe an example session
            SubStep(Step.RUNNING_EXAMPLE, when=lambda a: a.get("style") != "distance"),
            SubStep(Step.RUNNING_DISTANCE, when=lambda a: a.get("style") in ("distance", "both")),
        )),
        completed_step=Step.ACTIVITY_RUNNING_COMPLETED,
    ),
    ItemDetail(
        kind=ItemKind.ACTIVITY,
        item="Other",
        payload_key="other_activity",
        flow=SubFlow((SubStep(Step.OTHER_ACTIVITY),)),
        completed_step=Step.ACTIVITY_OTHER_COMPLETED,
    ),
]


# =============================================================================
# Goals
# =============================================================================

GOAL_OPTIONS = [
    "get-stronger",
    "get-faster",
    "gain-muscle",
    "lose-fat",
    "train-event",
    "push-myself",
]

# The goals screen asks for exactly this many
GOAL_SELECTION_COUNT = 2

_GOAL_DETAILS = [
    ItemDetail(
        kind=ItemKind.GOAL,
        item="get-stronger",
        payload_key="get_stronger",
        flow=SubFlow((
            SubStep(Step.GET_STRONGER_FOCUS),
            SubStep(Step.GET_STRONGER_DETAILS),
        )),
        completed_step=Step.GOAL_GET_STRONGER_COMPLETED,
    ),
    ItemDetail(
        kind=ItemKind.GOAL,
        item="get-faster",
        payload_key="get_faster",
        flow=SubFlow((
            SubStep(Step.GET_FASTER_TYPE),
            SubStep(Step.GET_FASTER_DETAILS),
        )),
        completed_step=Step.GOAL_GET_FASTER_COMPLETED,
    ),
    ItemDetail(
        kind=ItemKind.GOAL,
        item="gain-muscle",
        payload_key="gain_muscle",
        flow=SubFlow((
            SubStep(Step.GAIN_MUSCLE_CURRENT_MASS),
            SubStep(Step.GAIN_MUSCLE_DETAILS),
        )),
        completed_step=Step.GOAL_GAIN_MUSCLE_COMPLETED,
    ),
    ItemDetail(
        kind=ItemKind.GOAL,
        item="lose-fat",
        payload_key="lose_body_fat",
        flow=SubFlow((
            SubStep(Step.LOSE_BODY_FAT_CURRENT),
            SubStep(Step.LOSE_BODY_FAT_DETAILS),
        )),
        completed_step=Step.GOAL_LOSE_FAT_COMPLETED,
    ),
    ItemDetail(
        kind=ItemKind.GOAL,
        item="train-event",
        payload_key="train_event",
        flow=SubFlow((
            SubStep(Step.TRAIN_EVENT_TYPE),
            SubStep(Step.TRAIN_EVENT_DETAILS),
            SubStep(Step.TRAIN_EVENT_TRAINING_STATUS),
            SubStep(
                Step.TRAIN_EVENT_CURRENT_STATUS,
                when=lambda a: bool(a.get("has_started_training")),
            ),
        )),
        completed_step=Step.GOAL_TRAIN_EVENT_COMPLETED,
    ),
]


# =============================================================================
# Lookups
# =============================================================================

ITEM_DETAILS: dict[ItemKind, dict[str, ItemDetail]] = {
    ItemKind.ACTIVITY: {d.item: d for d in _ACTIVITY_DETAILS},
    ItemKind.GOAL: {d.item: d for d in _GOAL_DETAILS},
}

# Item -> first detail screen
ACTIVITY_SCREEN_MAP: dict[str, Step] = {
    item: detail.first_step for item, detail in ITEM_DETAILS[ItemKind.ACTIVITY].items()
}
GOAL_SCREEN_MAP: dict[str, Step] = {
    item: detail.first_step for item, detail in ITEM_DETAILS[ItemKind.GOAL].items()
}

_BY_SUB_STEP: dict[Step, ItemDetail] = {
    sub.step: detail
    for details in ITEM_DETAILS.values()
    for detail in details.values()
    for sub in detail.flow.steps
}
_BY_MARKER: dict[Step, ItemDetail] = {
    detail.completed_step: detail
    for details in ITEM_DETAILS.values()
    for detail in details.values()
}


def get_item_detail(kind: ItemKind, item: str) -> ItemDetail | None:
    """Detail flow for an item, or None if it has no detail screen."""
    return ITEM_DETAILS[kind].get(item)


def detail_for_sub_step(step: Step) -> ItemDetail | None:
    """The item whose sub-flow contains `step`."""
    return _BY_SUB_STEP.get(step)


def detail_for_marker(step: Step) -> ItemDetail | None:
    """The item whose completion marker is `step`."""
    return _BY_MARKER.get(step)
