class TrackerError(Exception):
    """Base class for errors raised by the reporting services."""


class NotFoundError(TrackerError):
    def __init__(self, entity: str, entity_id: int | None = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class InvalidRangeError(TrackerError, ValueError):
    pass


class DataSourceError(TrackerError):
    """The underlying store failed; the original error is chained as __cause__."""


class DuplicateBudgetError(TrackerError):
    pass
