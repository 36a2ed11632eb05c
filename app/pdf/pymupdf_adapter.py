import threading

import pymupdf

from app.pdf.base import BasePdfDecoder, BasePdfDocument, BasePdfPage
from app.pdf.exceptions import DecodeError, PageAccessError, RenderError
from app.pdf.models import Dimensions, RasterFrame

# MuPDF's global context is not thread-safe.
_MUPDF_LOCK = threading.RLock()


class PyMuPdfPage(BasePdfPage):
    def __init__(self, page: pymupdf.Page, number: int) -> None:
        self._page = page
        self.number = number

    def viewport(self, scale: float) -> Dimensions:
        with _MUPDF_LOCK:
            rect = self._page.rect
        return Dimensions.scaled(rect.width, rect.height, scale)

    def render(self, scale: float) -> RasterFrame:
        try:
            with _MUPDF_LOCK:
                pix = self._page.get_pixmap(
                    matrix=pymupdf.Matrix(scale, scale),
                    colorspace=pymupdf.csRGB,
                    alpha=False,
                )
        except Exception as exc:
            raise RenderError(f"pymupdf render of page {self.number} failed: {exc}") from exc
        return RasterFrame(
            width=pix.width,
            height=pix.height,
            samples=bytes(pix.samples),
            mode="RGB",
            stride=pix.stride,
        )


class PyMuPdfDocument(BasePdfDocument):
    def __init__(self, doc: pymupdf.Document) -> None:
        self._doc = doc

    def page_count(self) -> int:
        with _MUPDF_LOCK:
            return self._doc.page_count

    def get_page(self, number: int) -> BasePdfPage:
        count = self.page_count()
        if not 1 <= number <= count:
            raise PageAccessError(f"page {number} out of range, document has {count} pages")
        try:
            with _MUPDF_LOCK:
                page = self._doc.load_page(number - 1)
        except Exception as exc:
            raise PageAccessError(f"pymupdf could not load page {number}: {exc}") from exc
        return PyMuPdfPage(page, number)

    def close(self) -> None:
        with _MUPDF_LOCK:
            self._doc.close()


class PyMuPdfAdapter(BasePdfDecoder):
    """Decodes and renders PDF documents using PyMuPDF."""

    def decode(self, pdf_bytes: bytes) -> BasePdfDocument:
        if not pdf_bytes:
            raise DecodeError("document is empty")
        try:
            with _MUPDF_LOCK:
                doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise DecodeError(f"pymupdf could not open document: {exc}") from exc
        with _MUPDF_LOCK:
            if doc.needs_pass:
                doc.close()
                raise DecodeError("document is password protected")
        return PyMuPdfDocument(doc)
