"""
Tests for the flow resolver.

Covers cold-start resume and "what's next" after a submit, which share
one code path.
"""

import pytest

from onboarding.catalog import ItemKind
from onboarding.errors import ScreenNotMappedError, UnknownStepError
from onboarding.presenter import SCREEN_ROUTES, screen_for
from onboarding.record import (
    ProgressRecord,
    mark_item_complete,
    new_record,
    record_step_reached,
)
from onboarding.resolver import describe, onboarding_progress, resolve
from onboarding.steps import Step


def _record(**kwargs) -> ProgressRecord:
    defaults = {"user_id": "user-1"}
    defaults.update(kwargs)
    for key in ("selected_activities", "selected_goals", "completed_activities", "completed_goals"):
        if key in defaults:
            defaults[key] = tuple(defaults[key])
    return ProgressRecord(**defaults)


class TestFreshAndTerminal:

    def test_missing_record_is_fresh_user(self):
        assert resolve(None) is Step.CORE_PROFILE

    def test_no_step_is_fresh_user(self):
        assert resolve(new_record("user-1")) is Step.CORE_PROFILE

    def test_registration_wins_over_everything(self):
        record = _record(
            current_step="garbage_token",
            selected_activities=["Running"],
            completed_activities=["Swimming"],
            registration_completed_at="2026-10-01T10:00:00+00:00",
        )
        assert resolve(record) is Step.COMPLETE
        assert describe(record).is_terminal

    def test_summary_leads_home(self):
        assert resolve(_record(current_step="summary")) is Step.COMPLETE

    def test_complete_step_stays_home(self):
        assert resolve(_record(current_step="complete")) is Step.COMPLETE


class TestBackbone:

    @pytest.mark.parametrize("stored, expected", [
        ("core_profile", Step.PHYSICAL_INFO),
        ("phone_verified", Step.PHYSICAL_INFO),
        ("physical_info", Step.LOCATION),
        ("location", Step.PREFERENCES),
        ("preferences", Step.SCHEDULE),
        ("schedule", Step.PREFERRED_DAYS),
    ])
    def test_linear_steps(self, stored, expected):
        assert resolve(_record(current_step=stored)) is expected

    def test_unknown_step_is_an_error(self):
        with pytest.raises(UnknownStepError):
            resolve(_record(current_step="preferred-days"))

    def test_idempotent(self):
        record = _record(
            current_step="preferred_days",
            selected_activities=["Running", "Swimming"],
            completed_activities=["Running"],
        )
        assert resolve(record) == resolve(record)
        assert record.current_step == "preferred_days"


class TestActivitiesBranch:

    def test_running_then_yoga_scenario(self):
        record = _record(current_step="preferred_days", selected_activities=["Running", "Yoga"])
        resolution = describe(record)
        assert resolution.step is Step.RUNNING_STYLE
        assert resolution.kind is ItemKind.ACTIVITY
        assert resolution.item == "Running"

        # Same branch point once Running is complete: Yoga has no screen
        record = mark_item_complete(record, ItemKind.ACTIVITY, "Running")
        assert resolve(record) is Step.ANYTHING_ELSE

    def test_order_preserved(self):
        record = _record(
            current_step="preferred_days",
            selected_activities=["Weightlifting", "Running", "Swimming"],
            completed_activities=["Running"],
        )
        assert resolve(record) is Step.WEIGHTLIFTING_EQUIPMENT

    def test_all_complete_falls_through(self):
        record = _record(
            current_step="preferred_days",
            selected_activities=["Pilates", "Other"],
            completed_activities=["Other", "Pilates"],
        )
        assert resolve(record) is Step.ANYTHING_ELSE

    def test_no_mapped_activities_falls_through(self):
        record = _record(current_step="preferred_days", selected_activities=["Yoga", "Walking"])
        assert resolve(record) is Step.ANYTHING_ELSE

    def test_no_activities_falls_through(self):
        assert resolve(_record(current_step="preferred_days")) is Step.ANYTHING_ELSE

    def test_stray_completion_tolerated(self):
        record = _record(
            current_step="preferred_days",
            selected_activities=["Swimming"],
            completed_activities=["Running"],
        )
        assert resolve(record) is Step.SWIMMING_STYLE

    def test_completion_marker_reenters_checklist(self):
        record = _record(
            current_step="activity_running_completed",
            selected_activities=["Running", "Yoga", "Swimming"],
            completed_activities=["Running"],
        )
        assert resolve(record) is Step.SWIMMING_STYLE

    def test_monotone_progress(self):
        record = _record(
            current_step="running_distance",
            selected_activities=["Running", "Other"],
            detail_payload={"running": {"style": "distance"}},
        )
        record = mark_item_complete(record, ItemKind.ACTIVITY, "Running")
        record = record_step_reached(record, Step.ACTIVITY_RUNNING_COMPLETED)
        resolution = describe(record)
        assert resolution.item == "Other"
        assert resolution.step is Step.OTHER_ACTIVITY

    def test_last_marker_falls_through(self):
        record = _record(
            current_step="activity_other_completed",
            selected_activities=["Other"],
            completed_activities=["Other"],
        )
        assert resolve(record) is Step.ANYTHING_ELSE


class TestItemSubFlows:

    def test_running_distance_style(self):
        record = _record(
            current_step="running_style",
            selected_activities=["Running"],
            detail_payload={"running": {"style": "distance"}},
        )
        assert resolve(record) is Step.RUNNING_DISTANCE

    def test_running_both_styles(self):
        record = _record(
            current_step="running_style",
            selected_activities=["Running"],
            detail_payload={"running": {"style": "both"}},
        )
        assert resolve(record) is Step.RUNNING_EXAMPLE
        assert resolve(record_step_reached(record, Step.RUNNING_EXAMPLE)) is Step.RUNNING_DISTANCE

    def test_sub_step_of_completed_item_returns_to_checklist(self):
        record = _record(
            current_step="weightlifting_equipment",
            selected_activities=["Weightlifting", "Swimming"],
            completed_activities=["Weightlifting"],
        )
        assert resolve(record) is Step.SWIMMING_STYLE

    def test_finished_screens_without_mark_reoffers_item(self):
        record = _record(
            current_step="weightlifting_maxes",
            selected_activities=["Weightlifting"],
        )
        resolution = describe(record)
        assert resolution.step is Step.WEIGHTLIFTING_EQUIPMENT
        assert resolution.item == "Weightlifting"

    def test_pilates_without_membership_skips_studio(self):
        record = _record(
            current_step="pilates_membership",
            selected_activities=["Pilates", "Swimming"],
            completed_activities=["Pilates"],
            detail_payload={"pilates": {"membership": "no"}},
        )
        assert resolve(record) is Step.SWIMMING_STYLE

    def test_train_event_current_status_when_training(self):
        record = _record(
            current_step="train_event_training_status",
            selected_goals=["train-event", "get-faster"],
            detail_payload={"train_event": {"has_started_training": True}},
        )
        assert resolve(record) is Step.TRAIN_EVENT_CURRENT_STATUS


class TestGoalsBranch:

    def test_anything_else_hands_to_goals(self):
        record = _record(current_step="anything_else", selected_goals=["push-myself", "gain-muscle"])
        resolution = describe(record)
        assert resolution.step is Step.GAIN_MUSCLE_CURRENT_MASS
        assert resolution.kind is ItemKind.GOAL

    def test_goals_exhausted_go_to_summary(self):
        record = _record(
            current_step="goal_get_faster_completed",
            selected_goals=["get-faster", "push-myself"],
            completed_goals=["get-faster"],
        )
        assert resolve(record) is Step.SUMMARY

    def test_goal_marker_offers_next_goal(self):
        record = _record(
            current_step="goal_lose_fat_completed",
            selected_goals=["lose-fat", "get-stronger"],
            completed_goals=["lose-fat"],
        )
        assert resolve(record) is Step.GET_STRONGER_FOCUS

    def test_activity_state_does_not_leak_into_goals(self):
        record = _record(
            current_step="anything_else",
            selected_activities=["Running"],
            selected_goals=["get-faster", "lose-fat"],
            completed_goals=["get-faster"],
        )
        assert resolve(record) is Step.LOSE_BODY_FAT_CURRENT


class TestLegacyRows:
    """Rows written by earlier app releases resume where they left off."""

    @staticmethod
    def _row(step, activities=(), goals=(), completed_goals=(), data=None):
        return ProgressRecord.from_profile({
            "id": "user-1",
            "onboarding_step": step,
            "selected_activities": list(activities),
            "onboarding_data": {
                "selected_goals": list(goals),
                "_completed_goals": list(completed_goals),
                **(data or {}),
            },
        })

    def test_goals_resumes_goal_checklist(self):
        record = self._row("goals", goals=["lose-fat", "push-myself"])
        assert resolve(record) is Step.LOSE_BODY_FAT_CURRENT

    def test_goals_with_nothing_left_goes_to_summary(self):
        record = self._row("goals", goals=["push-myself", "lose-fat"], completed_goals=["lose-fat"])
        assert resolve(record) is Step.SUMMARY

    def test_selected_screen_continues_sub_flow(self):
        record = self._row("lose_body_fat_current_selected", goals=["lose-fat", "get-faster"])
        assert resolve(record) is Step.LOSE_BODY_FAT_DETAILS

        record = self._row("gain_muscle_current_mass_selected", goals=["gain-muscle", "get-faster"])
        assert resolve(record) is Step.GAIN_MUSCLE_DETAILS

    def test_training_status_respects_gate(self):
        record = self._row(
            "train_event_training_status_selected",
            goals=["train-event", "get-faster"],
            data={"train_event": {"has_started_training": True}},
        )
        assert describe(record).step is Step.TRAIN_EVENT_CURRENT_STATUS

    def test_completed_details_move_to_next_goal(self):
        record = self._row(
            "get_faster_details_completed",
            goals=["get-faster", "gain-muscle"],
            completed_goals=["get-faster"],
        )
        assert resolve(record) is Step.GAIN_MUSCLE_CURRENT_MASS

    @pytest.mark.parametrize("token", [
        "yoga_membership", "yoga_studio", "walking_location", "sports_types", "sports_play_type",
    ])
    def test_unmapped_activity_screens_resume_activities(self, token):
        record = self._row(token, activities=["Yoga", "Walking", "Sports", "Running"])
        resolution = describe(record)
        assert resolution.step is Step.RUNNING_STYLE
        assert resolution.item == "Running"

    def test_progress(self):
        assert onboarding_progress(self._row("goals")) == 80
        assert onboarding_progress(self._row("lose_body_fat_current_selected")) == 85


class TestScreens:

    def test_every_resolvable_step_has_a_screen(self):
        not_presented = {Step.PHONE_VERIFIED} | {s for s in Step if s.value.endswith("_completed")}
        for step in Step:
            if step not in not_presented:
                assert step in SCREEN_ROUTES, step

    def test_screen_for(self):
        assert screen_for(Step.COMPLETE) == "Home"
        assert screen_for(Step.RUNNING_STYLE) == "Running"

    def test_markers_have_no_screen(self):
        with pytest.raises(ScreenNotMappedError):
            screen_for(Step.ACTIVITY_RUNNING_COMPLETED)


class TestProgress:

    def test_fresh(self):
        assert onboarding_progress(None) == 0
        assert onboarding_progress(new_record("u")) == 0

    def test_backbone(self):
        assert onboarding_progress(_record(current_step="phone_verified")) == 10
        assert onboarding_progress(_record(current_step="preferences")) == 55
        assert onboarding_progress(_record(current_step="summary")) == 95

    def test_dynamic_steps(self):
        assert onboarding_progress(_record(current_step="running_example")) == 75
        assert onboarding_progress(_record(current_step="goal_train_event_completed")) == 85

    def test_registered(self):
        record = _record(current_step="summary", registration_completed_at="2026-10-01T00:00:00+00:00")
        assert onboarding_progress(record) == 100

    def test_unknown(self):
        with pytest.raises(UnknownStepError):
            onboarding_progress(_record(current_step="bogus"))
