"""
Onboarding Service.

Glue between screens, the Profile Store and the resolver. Every operation
follows the same order: load, mutate, save, then resolve against the record
that was just saved. Resume on cold start is the same resolve call with no
mutation in front of it.
"""

import logging

from onboarding.catalog import ItemKind, detail_for_marker, detail_for_sub_step, get_item_detail
from onboarding.errors import OnboardingError
from onboarding.record import (
    ProgressRecord,
    complete_registration,
    completion_step,
    mark_item_complete,
    new_record,
    record_answers,
    record_step_reached,
    select_items,
)
from onboarding.resolver import Resolution, describe
from onboarding.steps import TERMINAL_STEP, Step, parse_step

from .store import ProfileStore

logger = logging.getLogger(__name__)


class OnboardingService:
    """Screen-facing onboarding operations for one Profile Store."""

    def __init__(self, store: ProfileStore):
        self.store = store

    async def load(self, user_id: str) -> ProgressRecord:
        """Stored record, or a fresh one if the user has no profile yet."""
        record = await self.store.load(user_id)
        return record if record is not None else new_record(user_id)

    async def resume(self, user_id: str) -> Resolution:
        """Where a returning user should land."""
        record = await self.load(user_id)
        resolution = describe(record)
        logger.info(f"Resuming {user_id} at {resolution.step.value} (stored step: {record.current_step})")
        return resolution

    async def create_profile(self, user_id: str, fields: dict | None = None) -> Resolution:
        """Create the profile row once the phone number is verified."""
        record = await self.store.create(user_id, fields)
        return describe(record)

    async def submit_step(
        self,
        user_id: str,
        step: Step | str,
        answers: dict | None = None,
        activities: list[str] | None = None,
        goals: list[str] | None = None,
        fields: dict | None = None,
    ) -> Resolution:
        """
        Save a submitted screen and return the next step.

        Answers are stored under the step's own key, or under the item's key
        for activity and goal detail screens. Submitting the last screen an
        item will show marks that item complete. The summary is confirmed
        through finish(), never submitted as a step.
        """
        step = parse_step(step)
        if step in (Step.SUMMARY, TERMINAL_STEP) or detail_for_marker(step) is not None:
            raise OnboardingError(f"Step {step.value!r} cannot be submitted directly")

        record = await self.load(user_id)
        if record.is_registered:
            logger.info(f"Ignoring {step.value} submit for registered user {user_id}")
            return describe(record)

        detail = detail_for_sub_step(step)
        payload_key = detail.payload_key if detail else step.value

        if answers:
            record = record_answers(record, payload_key, answers)
        if activities is not None or goals is not None:
            record = select_items(record, activities=activities, goals=goals)
        record = record_step_reached(record, step)

        if detail is not None and detail.item in record.selected_for(detail.kind):
            answers_so_far = record.answers_for(detail.payload_key)
            if detail.flow.next_after(step, answers_so_far) is None:
                record = mark_item_complete(record, detail.kind, detail.item)
                record = record_step_reached(record, detail.completed_step)
                logger.info(f"{user_id} finished {detail.kind.value} {detail.item!r}")

        await self.store.save(record, fields)
        return describe(record)

    async def complete_item(
        self,
        user_id: str,
        kind: ItemKind | str,
        item: str,
        answers: dict | None = None,
    ) -> Resolution:
        """
        Mark an activity or goal done and return the next step.

        Items without a detail screen are marked but leave current_step alone.
        """
        kind = ItemKind(kind)
        record = await self.load(user_id)
        if record.is_registered:
            return describe(record)

        detail = get_item_detail(kind, item)
        if answers and detail is not None:
            record = record_answers(record, detail.payload_key, answers)

        record = mark_item_complete(record, kind, item)
        marker = completion_step(kind, item)
        if marker is not None:
            record = record_step_reached(record, marker)

        await self.store.save(record)
        logger.info(f"Marked {kind.value} {item!r} complete for {user_id}")
        return describe(record)

    async def finish(self, user_id: str, fields: dict | None = None) -> Resolution:
        """Confirm the summary and graduate the profile."""
        record = await self.load(user_id)
        if record.is_registered:
            return describe(record)

        record = complete_registration(record)
        await self.store.save(record, fields)
        logger.info(f"Registration completed for {user_id}")
        return describe(record)
