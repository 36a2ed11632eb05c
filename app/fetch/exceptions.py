from app.processor.exceptions import ErrorKind, StageError


class FetchError(StageError):
    """Raised when the source URL cannot be reached."""

    kind = ErrorKind.FETCH
    message = "Failed to fetch PDF from url"


class SourceHttpError(StageError):
    """Raised when the source responds with a non-success status."""

    kind = ErrorKind.SOURCE_HTTP
    status_code = 400
    message = "Failed to fetch PDF from url"


class ReadError(StageError):
    """Raised when the response body cannot be read into bytes."""

    kind = ErrorKind.READ
    message = "Failed to read PDF data"
