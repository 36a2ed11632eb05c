from enum import StrEnum


class ErrorKind(StrEnum):
    """Failure categories reported in a pipeline result."""

    INVALID_SOURCE = "InvalidSourceError"
    FETCH = "FetchError"
    SOURCE_HTTP = "SourceHttpError"
    READ = "ReadError"
    DECODE = "DecodeError"
    PAGE_ACCESS = "PageAccessError"
    RENDER = "RenderError"
    UPLOAD = "UploadError"
    INTERNAL = "InternalError"


class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class StageError(ProcessorError):
    """A pipeline stage failed.

    Subclasses fix the error kind, the response status and the human-readable
    message shown to callers. The exception text is the diagnostic detail;
    ``public_detail`` replaces it in responses when the raw text must not
    leave the service.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, detail: str, *, public_detail: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.public_detail = public_detail if public_detail is not None else detail


class InvalidSourceError(StageError):
    """Raised when the source URL does not look like a PDF document."""

    kind = ErrorKind.INVALID_SOURCE
    status_code = 400
    message = "URL does not reference a PDF document"


class InternalError(StageError):
    """Raised for failures that belong to no specific stage."""
