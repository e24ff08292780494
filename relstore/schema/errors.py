"""Schema-related exceptions."""


class SchemaLoadError(Exception):
    """Raised when a schema, state, action or shape file cannot be loaded."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaValidationError(Exception):
    """Raised when a schema fails validation.

    Covers both malformed schema data and schemas whose relations do not
    declare symmetric reciprocals.
    """

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
