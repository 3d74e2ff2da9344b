"""
Onboarding Steps.

Closed enumeration of every token that can be persisted as a profile's
onboarding_step, plus the linear sequencer for the fixed backbone.

The backbone is:
    core profile -> physical info -> location -> preferences -> schedule
    -> preferred days -> [activities] -> anything else -> [goals]
    -> summary -> complete

Two positions are branch points: the step after preferred days hands off to the
activities checklist, the step after anything else hands off to the goals
checklist. Everything else is a plain lookup.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .errors import UnknownStepError


class Step(str, Enum):
    """Every token a progress record may carry in current_step."""

    # Backbone
    CORE_PROFILE = "core_profile"
    PHONE_VERIFIED = "phone_verified"   # Written when the profile row is created
    PHYSICAL_INFO = "physical_info"
    LOCATION = "location"
    PREFERENCES = "preferences"
    SCHEDULE = "schedule"
    PREFERRED_DAYS = "preferred_days"
    ANYTHING_ELSE = "anything_else"
    SUMMARY = "summary"
    COMPLETE = "complete"

    # Activity detail screens
    WEIGHTLIFTING_EQUIPMENT = "weightlifting_equipment"
    WEIGHTLIFTING_MAXES = "weightlifting_maxes"
    SWIMMING_STYLE = "swimming_style"
    SWIMMING_EXAMPLE = "swimming_example"
    PILATES_MEMBERSHIP = "pilates_membership"
    PILATES_STUDIO = "pilates_studio"
    RUNNING_STYLE = "running_style"
    RUNNING_EXAMPLE = "running_example"
    RUNNING_DISTANCE = "running_distance"
    OTHER_ACTIVITY = "other_activity"

    # Goal detail screens
    GET_STRONGER_FOCUS = "get_stronger_focus"
    GET_STRONGER_DETAILS = "get_stronger_details"
    GET_FASTER_TYPE = "get_faster_type"
    GET_FASTER_DETAILS = "get_faster_details"
    GAIN_MUSCLE_CURRENT_MASS = "gain_muscle_current_mass"
    GAIN_MUSCLE_DETAILS = "gain_muscle_details"
    LOSE_BODY_FAT_CURRENT = "lose_body_fat_current"
    LOSE_BODY_FAT_DETAILS = "lose_body_fat_details"
    TRAIN_EVENT_TYPE = "train_event_type"
    TRAIN_EVENT_DETAILS = "train_event_details"
    TRAIN_EVENT_TRAINING_STATUS = "train_event_training_status"
    TRAIN_EVENT_CURRENT_STATUS = "train_event_current_status"

    # Per-item completion markers
    ACTIVITY_WEIGHTLIFTING_COMPLETED = "activity_weightlifting_completed"
    ACTIVITY_SWIMMING_COMPLETED = "activity_swimming_completed"
    ACTIVITY_PILATES_COMPLETED = "activity_pilates_completed"
    ACTIVITY_RUNNING_COMPLETED = "activity_running_completed"
    ACTIVITY_OTHER_COMPLETED = "activity_other_completed"
    GOAL_GET_STRONGER_COMPLETED = "goal_get_stronger_completed"
    GOAL_GET_FASTER_COMPLETED = "goal_get_faster_completed"
    GOAL_GAIN_MUSCLE_COMPLETED = "goal_gain_muscle_completed"
    GOAL_LOSE_FAT_COMPLETED = "goal_lose_fat_completed"
    GOAL_TRAIN_EVENT_COMPLETED = "goal_train_event_completed"


class Branch(Enum):
    """Non-step outcomes of the backbone lookup."""
    TO_ACTIVITIES = "branch_to_activities"
    TO_GOALS = "branch_to_goals"
    TERMINAL = "terminal"


FIRST_STEP = Step.CORE_PROFILE
TERMINAL_STEP = Step.COMPLETE


# Step just submitted -> what comes after it
_BACKBONE: dict[Step, Step | Branch] = {
    Step.CORE_PROFILE: Step.PHYSICAL_INFO,
    Step.PHONE_VERIFIED: Step.PHYSICAL_INFO,
    Step.PHYSICAL_INFO: Step.LOCATION,
    Step.LOCATION: Step.PREFERENCES,
    Step.PREFERENCES: Step.SCHEDULE,
    Step.SCHEDULE: Step.PREFERRED_DAYS,
    Step.PREFERRED_DAYS: Branch.TO_ACTIVITIES,
    Step.ANYTHING_ELSE: Branch.TO_GOALS,
    Step.SUMMARY: Branch.TERMINAL,
    Step.COMPLETE: Branch.TERMINAL,
}

# Where a branch lands once its checklist has nothing left
_FALLTHROUGH: dict[Branch, Step] = {
    Branch.TO_ACTIVITIES: Step.ANYTHING_ELSE,
    Branch.TO_GOALS: Step.SUMMARY,
}

# Tokens written by earlier app releases. Rows carrying them must still resume.
# Activity screens with no detail flow of their own resume the activities
# checklist; "goals" resumes the goals checklist.
_LEGACY_TOKENS: dict[str, Step] = {
    "goals": Step.ANYTHING_ELSE,
    "gain_muscle_current_mass_selected": Step.GAIN_MUSCLE_CURRENT_MASS,
    "lose_body_fat_current_selected": Step.LOSE_BODY_FAT_CURRENT,
    "lose_body_fat_details_completed": Step.LOSE_BODY_FAT_DETAILS,
    "get_faster_details_completed": Step.GET_FASTER_DETAILS,
    "train_event_training_status_selected": Step.TRAIN_EVENT_TRAINING_STATUS,
    "yoga_membership": Step.PREFERRED_DAYS,
    "yoga_studio": Step.PREFERRED_DAYS,
    "walking_location": Step.PREFERRED_DAYS,
    "sports_types": Step.PREFERRED_DAYS,
    "sports_play_type": Step.PREFERRED_DAYS,
}

BACKBONE_ORDER: tuple[Step, ...] = (
    Step.CORE_PROFILE,
    Step.PHYSICAL_INFO,
    Step.LOCATION,
    Step.PREFERENCES,
    Step.SCHEDULE,
    Step.PREFERRED_DAYS,
    Step.ANYTHING_ELSE,
    Step.SUMMARY,
    Step.COMPLETE,
)


def parse_step(token: str | Step) -> Step:
    """
    Convert a persisted token into a Step, failing loudly if it is unknown.

    Legacy tokens are translated to the step they stand for.
    """
    if isinstance(token, Step):
        return token
    try:
        return Step(token)
    except ValueError:
        pass
    if token in _LEGACY_TOKENS:
        return _LEGACY_TOKENS[token]
    raise UnknownStepError(token)


def is_backbone(step: Step) -> bool:
    return step in _BACKBONE


def next_linear_step(step: Step | str) -> Step | Branch:
    """
    Return what follows a backbone step.

    Raises UnknownStepError for tokens outside the enumeration and for
    dynamic (per-item) steps, which the backbone does not order.
    """
    step = parse_step(step)
    try:
        return _BACKBONE[step]
    except KeyError:
        raise UnknownStepError(step.value, reason="not a backbone step") from None


def branch_fallthrough(branch: Branch) -> Step:
    """Backbone step that follows an exhausted checklist branch."""
    return _FALLTHROUGH[branch]


# =============================================================================
# Per-item sub-flows
# =============================================================================
# Some items take more than one screen before they count as complete
# (e.g. Running asks for a style, then an example session). Each item gets a
# tiny linear sequencer of its own. A sub-step may be gated on the item's own
# answers; gates pick the next screen, they never decide completion.


Gate = Callable[[dict], bool]


@dataclass(frozen=True)
class SubStep:
    """One screen inside an item's sub-flow."""
    step: Step
    when: Gate | None = None

    def applies(self, answers: dict) -> bool:
        return self.when is None or bool(self.when(answers))


@dataclass(frozen=True)
class SubFlow:
    """Ordered screens for a single activity or goal."""
    steps: tuple[SubStep, ...]

    def __post_init__(self):
        if not self.steps:
            raise ValueError("SubFlow needs at least one step")
        if self.steps[0].when is not None:
            raise ValueError("First step of a SubFlow cannot be gated")

    def __contains__(self, step: object) -> bool:
        return any(s.step == step for s in self.steps)

    @property
    def first_step(self) -> Step:
        return self.steps[0].step

    def step_list(self) -> list[Step]:
        return [s.step for s in self.steps]

    def next_after(self, step: Step, answers: dict) -> Step | None:
        """Next applicable screen after `step`, or None when the sub-flow is done."""
        positions = self.step_list()
        if step not in positions:
            raise UnknownStepError(step.value, reason="step is not part of this sub-flow")

        for sub in self.steps[positions.index(step) + 1:]:
            if sub.applies(answers):
                return sub.step
        return None
