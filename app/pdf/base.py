from abc import ABC, abstractmethod
from types import TracebackType

from app.pdf.models import Dimensions, RasterFrame


class BasePdfPage(ABC):
    """Contract for a single page exposed by a decoded document."""

    number: int

    @abstractmethod
    def viewport(self, scale: float) -> Dimensions:
        """Return the integer pixel size of the page at ``scale``."""

    @abstractmethod
    def render(self, scale: float) -> RasterFrame:
        """Rasterize the page at ``scale`` into an RGB frame.

        Raises:
            RenderError: if rasterization fails for any reason.
        """


class BasePdfDocument(ABC):
    """Contract for a decoded, navigable PDF document."""

    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the document."""

    @abstractmethod
    def get_page(self, number: int) -> BasePdfPage:
        """Return the page with 1-based ``number``.

        Raises:
            PageAccessError: if the page is out of range or cannot be loaded.
        """

    @abstractmethod
    def close(self) -> None:
        """Release backend resources held by the document."""

    def __enter__(self) -> "BasePdfDocument":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BasePdfDecoder(ABC):
    """Contract for all PDF decoding adapters."""

    @abstractmethod
    def decode(self, pdf_bytes: bytes) -> BasePdfDocument:
        """Parse raw PDF bytes into a document.

        Backends must not evaluate embedded scripts or fetch external
        resources while parsing.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            An open document; the caller closes it.

        Raises:
            DecodeError: if the bytes are not a readable PDF.
        """
