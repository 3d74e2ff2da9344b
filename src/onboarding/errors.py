"""
Onboarding Errors.

Typed outcomes surfaced to callers of the resolver and the Profile Store.
Callers decide user-facing behavior; nothing here maps an error to a default step.
"""


class OnboardingError(Exception):
    """Base class for onboarding flow errors."""


class UnknownStepError(OnboardingError):
    """A progress record references a step outside the known enumeration."""

    def __init__(self, token: object, reason: str = "unknown step"):
        self.token = token
        super().__init__(f"{reason}: {token!r}")


class StoreUnavailableError(OnboardingError):
    """The Profile Store could not load or save a record."""

    def __init__(self, user_id: str, operation: str, cause: Exception | None = None):
        self.user_id = user_id
        self.operation = operation
        self.cause = cause
        message = f"Profile store unavailable during {operation} for user {user_id}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ItemNotSelectedError(OnboardingError):
    """Tried to complete an activity or goal the user never selected."""

    def __init__(self, kind: str, item: str):
        self.kind = kind
        self.item = item
        super().__init__(f"{kind} {item!r} is not in the user's selection")


class ScreenNotMappedError(OnboardingError):
    """A step has no screen route. This is a configuration error."""

    def __init__(self, step: object):
        self.step = step
        super().__init__(f"No screen mapped for step {step!r}")
