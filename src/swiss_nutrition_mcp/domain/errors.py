"""Error taxonomy surfaced to MCP clients."""

from typing import ClassVar


class NutritionError(Exception):
    """Base class for classified nutrition lookup failures."""

    kind: ClassVar[str] = "error"

    def __init__(self, message: str, *, food_id: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.food_id = food_id


class InvalidInputError(NutritionError):
    """Caller supplied malformed or empty input."""

    kind = "invalid_input"


class NotFoundError(NutritionError):
    """The data source has no data for a valid-looking identifier."""

    kind = "not_found"


class UpstreamError(NutritionError):
    """Transport or data-source failure."""

    kind = "upstream_error"
