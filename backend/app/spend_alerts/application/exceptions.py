"""Application-layer exceptions for alert job error handling.

These exceptions describe the failures an evaluation run can meet. Only a
StoreUnavailableError raised while listing eligible users aborts a run;
everything else is isolated to the user or crossing it concerns.
"""


class ApplicationError(Exception):
    """Base class for all application-layer exceptions."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class StoreUnavailableError(ApplicationError):
    """Raised when the state store cannot be read or written."""

    def __init__(self, operation: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"State store unavailable during {operation}{detail}",
            code="STORE_UNAVAILABLE"
        )
        self.operation = operation


class MalformedEntityError(ApplicationError):
    """Raised when an entity cannot be evaluated (e.g. a zero budget limit)."""

    def __init__(self, entity: str, entity_id: object, reason: str) -> None:
        super().__init__(
            message=f"{entity} {entity_id} cannot be evaluated: {reason}",
            code="MALFORMED_ENTITY"
        )
        self.entity = entity
        self.entity_id = entity_id


class UnknownJobError(ApplicationError):
    """Raised when a job name does not match any registered alert job."""

    def __init__(self, job_name: str) -> None:
        super().__init__(
            message=f"Unknown alert job '{job_name}'",
            code="UNKNOWN_JOB"
        )
        self.job_name = job_name
