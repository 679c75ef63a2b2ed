"""
Engine errors surfaced to callers
"""


class InvalidInputError(ValueError):
    """Raised when a value has the wrong structural type, e.g. a non-date where a date is required."""

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"{field}: {detail}")
