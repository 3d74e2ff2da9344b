"""
Flow Resolver.

Single entry point used on cold start and after every screen submit:
given a progress record, which step should the user see next?

Resolution order:
1. Registration completed      -> COMPLETE (home), whatever else the record says
2. No step yet                 -> first backbone step
3. Backbone step               -> next backbone step, or the checklist branch
                                  it hands off to (falling through when exhausted)
4. Item completion marker      -> back into the same checklist
5. Item sub-step (in progress) -> next screen of that item's sub-flow, or back
                                  into the checklist when the sub-flow is done

resolve() reads the record and nothing else. It never writes; advancing
state is the Mutation API's job.
"""

import logging
from dataclasses import dataclass

from .catalog import (
    ItemKind,
    detail_for_marker,
    detail_for_sub_step,
    get_item_detail,
)
from .checklist import tracker_for
from .errors import UnknownStepError
from .record import ProgressRecord
from .steps import (
    FIRST_STEP,
    TERMINAL_STEP,
    Branch,
    Step,
    branch_fallthrough,
    is_backbone,
    next_linear_step,
    parse_step,
)

logger = logging.getLogger(__name__)

_BRANCH_FOR_KIND = {
    ItemKind.ACTIVITY: Branch.TO_ACTIVITIES,
    ItemKind.GOAL: Branch.TO_GOALS,
}
_KIND_FOR_BRANCH = {branch: kind for kind, branch in _BRANCH_FOR_KIND.items()}


@dataclass(frozen=True)
class Resolution:
    """Next step, plus the dynamic item it belongs to (if any)."""
    step: Step
    kind: ItemKind | None = None
    item: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.step == TERMINAL_STEP


def resolve(record: ProgressRecord | None) -> Step:
    """Next step for this record. See describe() for the item context."""
    return describe(record).step


def describe(record: ProgressRecord | None) -> Resolution:
    """
    Resolve the next step and report which checklist item it serves.

    A missing record (store returned NotFound) is a fresh user.
    Raises UnknownStepError if the record carries a token outside the enumeration.
    """
    if record is None:
        return Resolution(FIRST_STEP)

    if record.is_registered:
        return Resolution(TERMINAL_STEP)

    if not record.current_step:
        return Resolution(FIRST_STEP)

    step = parse_step(record.current_step)

    if is_backbone(step):
        following = next_linear_step(step)
        if isinstance(following, Step):
            return Resolution(following)
        if following is Branch.TERMINAL:
            return Resolution(TERMINAL_STEP)
        return _resolve_branch(record, following)

    detail = detail_for_marker(step)
    if detail is not None:
        return _resolve_branch(record, _BRANCH_FOR_KIND[detail.kind])

    detail = detail_for_sub_step(step)
    if detail is not None:
        branch = _BRANCH_FOR_KIND[detail.kind]
        if detail.item in record.completed_for(detail.kind):
            return _resolve_branch(record, branch)

        following = detail.flow.next_after(step, record.answers_for(detail.payload_key))
        if following is not None:
            return Resolution(following, detail.kind, detail.item)

        # Last screen submitted but the item was never marked complete.
        # Completion is not inferred, so the checklist offers it again.
        logger.warning(
            f"User {record.user_id} finished {detail.item} screens without completion mark"
        )
        return _resolve_branch(record, branch)

    raise UnknownStepError(step.value, reason="step has no transition")


def _resolve_branch(record: ProgressRecord, branch: Branch) -> Resolution:
    """Next incomplete item for the branch's checklist, or the fallthrough step."""
    kind = _KIND_FOR_BRANCH[branch]
    tracker = tracker_for(kind)

    item = tracker.next_incomplete(record.selected_for(kind), record.completed_for(kind))
    if item is None:
        return Resolution(branch_fallthrough(branch))

    detail = get_item_detail(kind, item)
    return Resolution(detail.first_step, kind, item)


# =============================================================================
# Progress
# =============================================================================

_STEP_PROGRESS: dict[Step, int] = {
    Step.CORE_PROFILE: 10,
    Step.PHONE_VERIFIED: 10,
    Step.PHYSICAL_INFO: 25,
    Step.LOCATION: 40,
    Step.PREFERENCES: 55,
    Step.SCHEDULE: 65,
    Step.PREFERRED_DAYS: 75,
    Step.ANYTHING_ELSE: 80,
    Step.SUMMARY: 95,
    Step.COMPLETE: 100,
}

_KIND_PROGRESS = {
    ItemKind.ACTIVITY: 75,
    ItemKind.GOAL: 85,
}


def onboarding_progress(record: ProgressRecord | None) -> int:
    """Rough completion percentage for progress indicators."""
    if record is None or not record.current_step:
        return 0
    if record.is_registered:
        return 100

    step = parse_step(record.current_step)
    if step in _STEP_PROGRESS:
        return _STEP_PROGRESS[step]

    detail = detail_for_marker(step) or detail_for_sub_step(step)
    if detail is None:
        raise UnknownStepError(step.value, reason="step has no progress position")
    return _KIND_PROGRESS[detail.kind]
