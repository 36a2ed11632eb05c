import io

from PIL import Image

from app.imaging.exceptions import EncodeError
from app.imaging.models import EncodedImage
from app.pdf.models import RasterFrame


class PngEncoder:
    """Serializes raster frames to PNG with Pillow."""

    CONTENT_TYPE = "image/png"

    def __init__(self, compress_level: int = 6) -> None:
        self._compress_level = compress_level

    def encode(self, frame: RasterFrame) -> EncodedImage:
        try:
            image = Image.frombytes(
                frame.mode,
                (frame.width, frame.height),
                frame.samples,
                "raw",
                frame.mode,
                frame.stride,
            )
            buf = io.BytesIO()
            image.save(buf, format="PNG", compress_level=self._compress_level)
        except Exception as exc:
            raise EncodeError(f"PNG encoding failed: {exc}") from exc
        return EncodedImage(data=buf.getvalue(), content_type=self.CONTENT_TYPE)
