"""
Screen routes for resolved steps.

The mobile client renders whatever route name it is handed. Every step the
resolver can return must appear here; a missing entry is a configuration bug.
Completion markers and PHONE_VERIFIED are persisted tokens only, never shown.
"""

from .errors import ScreenNotMappedError
from .steps import Step

SCREEN_ROUTES: dict[Step, str] = {
    # Backbone
    Step.CORE_PROFILE: "RegisterCoreProfile",
    Step.PHYSICAL_INFO: "RegisterPhysicalInfo",
    Step.LOCATION: "RegisterLocation",
    Step.PREFERENCES: "RegisterPreferences",
    Step.SCHEDULE: "RegisterSchedule",
    Step.PREFERRED_DAYS: "RegisterPreferredDays",
    Step.ANYTHING_ELSE: "AnythingElse",
    Step.SUMMARY: "RegisterSummaryReview",
    Step.COMPLETE: "Home",

    # Activities
    Step.WEIGHTLIFTING_EQUIPMENT: "Weightlifting",
    Step.WEIGHTLIFTING_MAXES: "WeightliftingMaxes",
    Step.SWIMMING_STYLE: "Swimming",
    Step.SWIMMING_EXAMPLE: "SwimmingExample",
    Step.PILATES_MEMBERSHIP: "Pilates",
    Step.PILATES_STUDIO: "PilatesStudio",
    Step.RUNNING_STYLE: "Running",
    Step.RUNNING_EXAMPLE: "RunningExample",
    Step.RUNNING_DISTANCE: "RunningDistance",
    Step.OTHER_ACTIVITY: "Other",

    # Goals
    Step.GET_STRONGER_FOCUS: "RegisterGetStronger",
    Step.GET_STRONGER_DETAILS: "RegisterGetStrongerDetails",
    Step.GET_FASTER_TYPE: "RegisterGetFaster",
    Step.GET_FASTER_DETAILS: "RegisterGetFasterDetails",
    Step.GAIN_MUSCLE_CURRENT_MASS: "RegisterGainMuscle",
    Step.GAIN_MUSCLE_DETAILS: "RegisterGainMuscleDetails",
    Step.LOSE_BODY_FAT_CURRENT: "RegisterLoseBodyFat",
    Step.LOSE_BODY_FAT_DETAILS: "RegisterLoseBodyFatDetails",
    Step.TRAIN_EVENT_TYPE: "RegisterTrainEvent",
    Step.TRAIN_EVENT_DETAILS: "RegisterTrainEventDetails",
    Step.TRAIN_EVENT_TRAINING_STATUS: "RegisterTrainEventTrainingStatus",
    Step.TRAIN_EVENT_CURRENT_STATUS: "RegisterTrainEventCurrentStatus",
}


def screen_for(step: Step) -> str:
    """Route name for a resolved step."""
    try:
        return SCREEN_ROUTES[step]
    except KeyError:
        raise ScreenNotMappedError(step) from None
