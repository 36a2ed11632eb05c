from typing import Any

import httpx

from app.config.settings import Settings
from app.fetch.source_fetcher import SourceFetcher
from app.imaging.encoder import PngEncoder
from app.logging.logger import Log
from app.pdf.factory import PdfDecoderFactory
from app.processor.exceptions import InternalError, StageError
from app.processor.models import PipelineResult, SourceReference
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    ComputeViewportStep,
    DecodeDocumentStep,
    DeriveKeyStep,
    EncodeImageStep,
    FetchSourceStep,
    FinalizeStep,
    GetPageStep,
    RenderPageStep,
    UploadStep,
    ValidateSourceStep,
)
from app.storage.keys import KeyDeriver
from app.storage.uploader import ObjectStorageUploader


class Processor:
    """Runs the thumbnail pipeline for one source URL per call.

    Pipeline: fetch -> decode -> page -> viewport -> render -> encode ->
    key -> upload -> finalize. The first failing step ends the run; its
    error becomes the result. Steps hold only shared, thread-safe
    collaborators, so one Processor serves concurrent calls.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(self, url: str) -> PipelineResult:
        """Run every step for ``url`` and return a result; never raises."""
        context = PipelineContext(source=SourceReference(url=url))
        stage = "start"
        try:
            for step in self._steps:
                stage = step.stage
                context = step.run(context)
        except StageError as exc:
            Log.error(f"Thumbnail for {url} failed at stage '{stage}': {exc.detail}")
            return PipelineResult.failed(stage, exc)
        except Exception as exc:
            Log.exception(f"Thumbnail for {url} failed unexpectedly at stage '{stage}'")
            return PipelineResult.failed(stage, InternalError(str(exc)))
        finally:
            self._close_document(context)

        if context.key is None or not context.public_url:
            return PipelineResult.failed(
                stage, InternalError("pipeline finished without a stored thumbnail")
            )
        Log.info(f"Thumbnail for {url} stored at {context.key.path}")
        return PipelineResult.succeeded(context.key.path, context.public_url)

    def _close_document(self, context: PipelineContext) -> None:
        if context.document is None:
            return
        try:
            context.document.close()
        except Exception as exc:
            Log.warning(f"Failed to close document for {context.source.url}: {exc}")
        context.document = None
        context.page = None


def build_steps(
    settings: Settings,
    http_client: httpx.Client,
    s3_client: Any,
) -> list[PipelineStep]:
    """Assemble the ordered pipeline steps from settings and shared clients."""
    fetcher = SourceFetcher(http_client, max_bytes=settings.fetch_max_bytes)
    decoder = PdfDecoderFactory.create(settings)
    key_deriver = KeyDeriver(
        bucket=settings.storage_bucket_name,
        prefix=settings.thumbnail_key_prefix,
    )
    uploader = ObjectStorageUploader(s3_client, settings.storage_public_base_url)

    steps: list[PipelineStep] = []
    if settings.require_pdf_url:
        steps.append(ValidateSourceStep())
    steps.extend(
        [
            FetchSourceStep(fetcher),
            DecodeDocumentStep(decoder),
            GetPageStep(),
            ComputeViewportStep(settings.render_scale, settings.max_render_pixels),
            RenderPageStep(settings.render_scale),
            EncodeImageStep(PngEncoder()),
            DeriveKeyStep(key_deriver),
            UploadStep(uploader),
            FinalizeStep(
                uploader,
                signed_url_expires_in=(
                    None
                    if settings.storage_public_read
                    else settings.storage_signed_url_expires_seconds
                ),
            ),
        ]
    )
    return steps


def build_processor(
    settings: Settings,
    http_client: httpx.Client,
    s3_client: Any,
) -> Processor:
    """Build a Processor around long-lived HTTP and storage clients."""
    return Processor(steps=build_steps(settings, http_client, s3_client))
