"""Domain errors surfaced by the food cache and meal services."""


class IntakeTrackerError(Exception):
    """Base class for errors raised by the intake tracker core."""


class ValidationError(IntakeTrackerError):
    """Input has the wrong shape or is out of range."""


class AuthError(IntakeTrackerError):
    """The request carries no valid credentials."""


class ForbiddenError(IntakeTrackerError):
    """The meal does not belong to the requesting user."""


class NotFoundError(IntakeTrackerError):
    """A meal or a logged food entry does not exist."""


class FoodNotFoundError(IntakeTrackerError):
    """The nutrition database has no food for the requested id."""

    def __init__(self, fdc_id: int) -> None:
        super().__init__(f"Food {fdc_id} not found")
        self.fdc_id = fdc_id


class UpstreamUnavailableError(IntakeTrackerError):
    """The nutrition database timed out or failed; callers may retry."""


class StoreError(IntakeTrackerError):
    """Unexpected persistence failure."""
