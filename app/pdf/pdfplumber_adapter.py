import io
import threading

import pdfplumber
from pdfplumber.page import Page
from pdfplumber.pdf import PDF

from app.pdf.base import BasePdfDecoder, BasePdfDocument, BasePdfPage
from app.pdf.exceptions import DecodeError, PageAccessError, RenderError
from app.pdf.models import Dimensions, RasterFrame

POINTS_PER_INCH = 72

# pdfium, used by pdfplumber for rendering, is not thread-safe.
_PDFIUM_LOCK = threading.Lock()


class PdfPlumberPage(BasePdfPage):
    def __init__(self, page: Page, number: int) -> None:
        self._page = page
        self.number = number

    def viewport(self, scale: float) -> Dimensions:
        return Dimensions.scaled(float(self._page.width), float(self._page.height), scale)

    def render(self, scale: float) -> RasterFrame:
        try:
            with _PDFIUM_LOCK:
                image = self._page.to_image(resolution=POINTS_PER_INCH * scale).original
            image = image.convert("RGB")
        except Exception as exc:
            raise RenderError(
                f"pdfplumber render of page {self.number} failed: {exc}"
            ) from exc
        width, height = image.size
        return RasterFrame(
            width=width,
            height=height,
            samples=image.tobytes(),
            mode="RGB",
            stride=width * 3,
        )


class PdfPlumberDocument(BasePdfDocument):
    def __init__(self, pdf: PDF) -> None:
        self._pdf = pdf

    def page_count(self) -> int:
        return len(self._pdf.pages)

    def get_page(self, number: int) -> BasePdfPage:
        try:
            pages = self._pdf.pages
        except Exception as exc:
            raise PageAccessError(f"pdfplumber could not read page tree: {exc}") from exc
        if not 1 <= number <= len(pages):
            raise PageAccessError(
                f"page {number} out of range, document has {len(pages)} pages"
            )
        return PdfPlumberPage(pages[number - 1], number)

    def close(self) -> None:
        self._pdf.close()


class PdfPlumberAdapter(BasePdfDecoder):
    """Decodes PDF with pdfplumber and renders pages through pypdfium2."""

    def decode(self, pdf_bytes: bytes) -> BasePdfDocument:
        if not pdf_bytes:
            raise DecodeError("document is empty")
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as exc:
            raise DecodeError(f"pdfplumber could not open document: {exc}") from exc
        try:
            _ = pdf.pages
        except Exception as exc:
            pdf.close()
            raise DecodeError(f"pdfplumber could not read page tree: {exc}") from exc
        return PdfPlumberDocument(pdf)
