from app.processor.exceptions import ErrorKind, StageError


class DecodeError(StageError):
    """Raised when bytes cannot be parsed as a PDF document."""

    kind = ErrorKind.DECODE
    message = "Failed to load PDF document"


class PageAccessError(StageError):
    """Raised when the requested page does not exist or cannot be loaded."""

    kind = ErrorKind.PAGE_ACCESS
    message = "Failed to get first page of PDF"


class RenderError(StageError):
    """Raised when a page cannot be rasterized."""

    kind = ErrorKind.RENDER
    message = "Failed to render PDF page"
