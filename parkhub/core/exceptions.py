class ParkHubError(Exception):
    """Base class for domain errors surfaced to API callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPeriod(ParkHubError):
    pass


class DataAccessError(ParkHubError):
    """Storage failure while fetching report inputs; the report is aborted."""
