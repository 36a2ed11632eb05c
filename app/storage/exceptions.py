from app.processor.exceptions import ErrorKind, StageError


class UploadError(StageError):
    """Raised when the object store rejects or fails a put."""

    kind = ErrorKind.UPLOAD
    message = "Failed to upload thumbnail to storage"


class SignedUrlError(StageError):
    """Raised when a presigned download URL cannot be generated."""

    message = "Failed to sign thumbnail URL"
