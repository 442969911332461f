"""Shared input validation for prompt templates."""


class InvalidInputError(ValueError):
    """Raised when a prompt argument is empty.

    Attributes:
        argument: Name of the offending argument (e.g. "context", "query").
    """

    def __init__(self, argument: str, message: str | None = None) -> None:
        self.argument = argument
        super().__init__(message or f"The {argument} must not be empty.")


def require_text(value: str | None, argument: str) -> str:
    """Return ``value`` unchanged, or raise if it is missing or blank."""
    if value is None or not value.strip():
        raise InvalidInputError(argument)
    return value
