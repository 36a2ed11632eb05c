from app.fetch.source_fetcher import SourceFetcher
from app.imaging.encoder import PngEncoder
from app.logging.logger import Log
from app.pdf.base import BasePdfDecoder
from app.pdf.exceptions import RenderError
from app.processor.exceptions import InvalidSourceError
from app.processor.pipeline import PipelineContext, PipelineStep
from app.storage.keys import KeyDeriver, looks_like_pdf_url
from app.storage.uploader import ObjectStorageUploader

FIRST_PAGE = 1


class ValidateSourceStep(PipelineStep):
    stage = "validate_source"

    def run(self, context: PipelineContext) -> PipelineContext:
        if not looks_like_pdf_url(context.source.url):
            raise InvalidSourceError(f"'{context.source.url}' does not end in .pdf")
        return context


class FetchSourceStep(PipelineStep):
    stage = "fetch"

    def __init__(self, fetcher: SourceFetcher) -> None:
        self._fetcher = fetcher

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.info(f"Fetching PDF from {context.source.url}")
        context.raw_bytes = self._fetcher.fetch(context.source.url)
        Log.info(f"Fetched {len(context.raw_bytes)} bytes from {context.source.url}")
        return context


class DecodeDocumentStep(PipelineStep):
    stage = "decode"

    def __init__(self, decoder: BasePdfDecoder) -> None:
        self._decoder = decoder

    def run(self, context: PipelineContext) -> PipelineContext:
        context.document = self._decoder.decode(context.raw_bytes)
        context.raw_bytes = b""
        Log.info(f"Decoded PDF with {context.document.page_count()} pages")
        return context


class GetPageStep(PipelineStep):
    stage = "get_page"

    def __init__(self, page_number: int = FIRST_PAGE) -> None:
        self._page_number = page_number

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before page access")
        context.page = context.document.get_page(self._page_number)
        return context


class ComputeViewportStep(PipelineStep):
    stage = "viewport"

    def __init__(self, scale: float, max_pixels: int) -> None:
        self._scale = scale
        self._max_pixels = max_pixels

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.page is None:
            raise ValueError("PipelineContext.page must be set before viewport computation")
        viewport = context.page.viewport(self._scale)
        if viewport.width <= 0 or viewport.height <= 0:
            raise RenderError(f"page has empty viewport {viewport.width}x{viewport.height}")
        if viewport.pixels > self._max_pixels:
            raise RenderError(
                f"viewport {viewport.width}x{viewport.height} exceeds "
                f"limit of {self._max_pixels} pixels"
            )
        context.viewport = viewport
        return context


class RenderPageStep(PipelineStep):
    stage = "render"

    def __init__(self, scale: float) -> None:
        self._scale = scale

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.page is None:
            raise ValueError("PipelineContext.page must be set before rendering")
        context.frame = context.page.render(self._scale)
        Log.info(
            f"Rendered page {context.page.number} at "
            f"{context.frame.width}x{context.frame.height}"
        )
        return context


class EncodeImageStep(PipelineStep):
    stage = "encode"

    def __init__(self, encoder: PngEncoder) -> None:
        self._encoder = encoder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.frame is None:
            raise ValueError("PipelineContext.frame must be set before encoding")
        context.image = self._encoder.encode(context.frame)
        context.frame = None
        return context


class DeriveKeyStep(PipelineStep):
    stage = "derive_key"

    def __init__(self, key_deriver: KeyDeriver) -> None:
        self._key_deriver = key_deriver

    def run(self, context: PipelineContext) -> PipelineContext:
        context.key = self._key_deriver.derive(context.source.url)
        return context


class UploadStep(PipelineStep):
    stage = "upload"

    def __init__(self, uploader: ObjectStorageUploader) -> None:
        self._uploader = uploader

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.key is None or context.image is None:
            raise ValueError("PipelineContext.key and image must be set before upload")
        Log.info(f"Uploading thumbnail to {context.key.bucket}/{context.key.path}")
        self._uploader.upload(context.key, context.image)
        return context


class FinalizeStep(PipelineStep):
    stage = "finalize"

    def __init__(
        self,
        uploader: ObjectStorageUploader,
        signed_url_expires_in: int | None = None,
    ) -> None:
        self._uploader = uploader
        self._signed_url_expires_in = signed_url_expires_in

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.key is None:
            raise ValueError("PipelineContext.key must be set before finalize")
        if self._signed_url_expires_in is None:
            context.public_url = self._uploader.public_url(context.key)
        else:
            context.public_url = self._uploader.signed_url(
                context.key, expires_in=self._signed_url_expires_in
            )
        return context
