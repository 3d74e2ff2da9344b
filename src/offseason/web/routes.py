"""
Onboarding API Endpoints.

The mobile client calls these on launch (GET /state) and after every screen
submit. Each write endpoint answers with the next step and the screen route
to open, so the client never decides navigation on its own.
"""

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from onboarding.catalog import ACTIVITY_OPTIONS, GOAL_OPTIONS, GOAL_SELECTION_COUNT, ItemKind
from onboarding.checklist import tracker_for
from onboarding.errors import (
    OnboardingError,
    ScreenNotMappedError,
    StoreUnavailableError,
    UnknownStepError,
)
from onboarding.presenter import screen_for
from onboarding.record import ProgressRecord
from onboarding.resolver import Resolution, describe, onboarding_progress
from onboarding.steps import Step

from offseason.service import OnboardingService
from offseason.store import ProfileStore
from offseason.web.auth import AuthenticatedUser, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


def get_onboarding_service() -> OnboardingService:
    """Service dependency. Overridden in tests."""
    return OnboardingService(ProfileStore())


# =============================================================================
# Request/Response Models
# =============================================================================


class ProfileCreateRequest(BaseModel):
    """Core profile submitted right after phone verification."""
    first_name: str
    last_name: str
    phone_number: str


class StepRequest(BaseModel):
    """A submitted screen."""
    step: Step
    answers: dict = Field(default_factory=dict)
    selected_activities: list[str] | None = None
    selected_goals: list[str] | None = None

    @field_validator("selected_activities")
    @classmethod
    def check_activities(cls, activities: list[str] | None) -> list[str] | None:
        if activities is not None:
            unknown = [a for a in activities if a not in ACTIVITY_OPTIONS]
            if unknown:
                raise ValueError(f"Unknown activities: {unknown}")
        return activities

    @field_validator("selected_goals")
    @classmethod
    def check_goals(cls, goals: list[str] | None) -> list[str] | None:
        if goals is None:
            return goals
        unknown = [g for g in goals if g not in GOAL_OPTIONS]
        if unknown:
            raise ValueError(f"Unknown goals: {unknown}")
        if len(set(goals)) != GOAL_SELECTION_COUNT:
            raise ValueError(f"Select exactly {GOAL_SELECTION_COUNT} goals")
        return goals


class ItemCompleteRequest(BaseModel):
    """Last screen of an activity or goal was submitted."""
    kind: ItemKind
    item: str
    answers: dict = Field(default_factory=dict)


class StepResponse(BaseModel):
    """Where to go after a submit."""
    success: bool = True
    next_step: str
    screen: str
    item_kind: str | None = None
    item: str | None = None
    message: str = ""


class StateResponse(BaseModel):
    """Current onboarding progress, used for cold-start resume."""
    user_id: str
    current_step: str | None
    next_step: str
    screen: str
    item_kind: str | None = None
    item: str | None = None
    progress: int
    registration_complete: bool
    selected_activities: list[str] = []
    selected_goals: list[str] = []
    completed_activities: list[str] = []
    completed_goals: list[str] = []
    remaining_activities: list[str] = []
    remaining_goals: list[str] = []


# =============================================================================
# Helpers
# =============================================================================


def _raise_http(error: OnboardingError) -> NoReturn:
    """Translate an onboarding error into an HTTP response."""
    if isinstance(error, StoreUnavailableError):
        raise HTTPException(status_code=503, detail="Profile store unavailable, please retry")
    if isinstance(error, UnknownStepError):
        logger.error(f"Corrupt onboarding step: {error}")
        raise HTTPException(status_code=409, detail=str(error))
    if isinstance(error, ScreenNotMappedError):
        logger.error(f"Screen configuration error: {error}")
        raise HTTPException(status_code=500, detail=str(error))
    # ItemNotSelectedError and bad submits
    raise HTTPException(status_code=400, detail=str(error))


def _step_response(resolution: Resolution, message: str = "") -> StepResponse:
    return StepResponse(
        next_step=resolution.step.value,
        screen=screen_for(resolution.step),
        item_kind=resolution.kind.value if resolution.kind else None,
        item=resolution.item,
        message=message,
    )


def _state_response(record: ProgressRecord) -> StateResponse:
    resolution = describe(record)
    return StateResponse(
        user_id=record.user_id,
        current_step=record.current_step,
        next_step=resolution.step.value,
        screen=screen_for(resolution.step),
        item_kind=resolution.kind.value if resolution.kind else None,
        item=resolution.item,
        progress=onboarding_progress(record),
        registration_complete=record.is_registered,
        selected_activities=list(record.selected_activities),
        selected_goals=list(record.selected_goals),
        completed_activities=list(record.completed_activities),
        completed_goals=list(record.completed_goals),
        remaining_activities=tracker_for(ItemKind.ACTIVITY).remaining(
            record.selected_activities, record.completed_activities
        ),
        remaining_goals=tracker_for(ItemKind.GOAL).remaining(
            record.selected_goals, record.completed_goals
        ),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/state", response_model=StateResponse)
async def get_onboarding_state(
    user: AuthenticatedUser = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
) -> StateResponse:
    """Get current onboarding progress and the screen to resume at."""
    try:
        record = await service.load(user.id)
        return _state_response(record)
    except OnboardingError as e:
        _raise_http(e)


@router.post("/profile", response_model=StepResponse)
async def create_profile(
    request: ProfileCreateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
) -> StepResponse:
    """Create the profile row after phone verification."""
    try:
        resolution = await service.create_profile(user.id, request.model_dump())
        return _step_response(resolution, message="Profile created")
    except OnboardingError as e:
        _raise_http(e)


@router.post("/steps", response_model=StepResponse)
async def submit_step(
    request: StepRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
) -> StepResponse:
    """Save a submitted screen and return the next one."""
    try:
        resolution = await service.submit_step(
            user.id,
            request.step,
            answers=request.answers,
            activities=request.selected_activities,
            goals=request.selected_goals,
        )
        return _step_response(resolution, message=f"{request.step.value} saved")
    except OnboardingError as e:
        _raise_http(e)


@router.post("/items/complete", response_model=StepResponse)
async def complete_item(
    request: ItemCompleteRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
) -> StepResponse:
    """Mark an activity or goal complete and return the next screen."""
    try:
        resolution = await service.complete_item(
            user.id,
            request.kind,
            request.item,
            answers=request.answers,
        )
        return _step_response(resolution, message=f"{request.item} completed")
    except OnboardingError as e:
        _raise_http(e)


@router.post("/complete", response_model=StepResponse)
async def complete_onboarding(
    user: AuthenticatedUser = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
) -> StepResponse:
    """Confirm the summary and finish registration."""
    try:
        resolution = await service.finish(user.id)
        return _step_response(resolution, message="Registration complete")
    except OnboardingError as e:
        _raise_http(e)
