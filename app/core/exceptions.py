class CalendarError(Exception):
    """Base class for availability and calendar errors."""


class InvalidRangeError(CalendarError, ValueError):
    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"Range start {start} is after range end {end}")


class EmptyDoctorSetError(CalendarError, ValueError):
    def __init__(self, message: str = "At least one doctor is required"):
        super().__init__(message)


class DataIntegrityError(CalendarError):
    """Stored schedule data is malformed, e.g. a weekday outside 0..6."""


class UpstreamFetchError(CalendarError):
    """A store adapter could not load its data. Callers may degrade to empty data."""

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to fetch {source}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
