"""Action-related exceptions."""


class ActionValidationError(Exception):
    """Raised when data is not a syntactically valid action."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
