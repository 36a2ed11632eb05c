from app.processor.exceptions import InternalError


class EncodeError(InternalError):
    """Raised when a raster frame cannot be serialized."""
