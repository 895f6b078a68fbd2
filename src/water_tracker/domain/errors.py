"""Domain errors raised by water tracker services."""


class InvalidBudgetError(ValueError):
    """Raised when a daily budget is not a positive number of gallons."""


class UnknownActivityError(ValueError):
    """Raised when an activity id is not part of the catalog."""

    def __init__(self, activity_id: int) -> None:
        super().__init__(f"Unknown activity id: {activity_id}")
        self.activity_id = activity_id


class SignupValidationError(ValueError):
    """Raised when sign-up input fails validation."""


class DuplicateEmailError(ValueError):
    """Raised when an account already exists for an email."""


class InvalidCredentialsError(ValueError):
    """Raised when an email/password pair does not match a profile."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")
