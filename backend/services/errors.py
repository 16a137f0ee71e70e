"""
Service-layer failures surfaced to the API as 5xx envelopes.

InvalidParameter (input errors, 400) lives in utils.normalize next to the
parsers that raise it.
"""


class ServiceError(Exception):
    """Base class for failures the API reports with a fixed public message."""

    status_code = 500
    code = "INTERNAL_ERROR"
    public_message = "An unexpected error occurred"

    def __init__(self, message: str = None, details: str = None):
        super().__init__(message or self.public_message)
        self.details = details


class UpstreamFetchFailure(ServiceError):
    """The seed fixture could not be fetched or was not a JSON list of records."""

    code = "UPSTREAM_FETCH_FAILED"
    public_message = "Error initializing database"


class StoreFailure(ServiceError):
    """A query, aggregation or seed write failed inside the database."""

    code = "STORE_FAILURE"
    public_message = "Error querying the transaction store"
