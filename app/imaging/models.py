from dataclasses import dataclass


@dataclass(frozen=True)
class EncodedImage:
    """Compressed image bytes ready for upload."""

    data: bytes
    content_type: str = "image/png"

    @property
    def size(self) -> int:
        return len(self.data)
