from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.imaging.models import EncodedImage
from app.pdf.base import BasePdfDocument, BasePdfPage
from app.pdf.models import Dimensions, RasterFrame
from app.processor.models import SourceReference
from app.storage.models import StorageKey


@dataclass(slots=True)
class PipelineContext:
    source: SourceReference
    raw_bytes: bytes = b""
    document: BasePdfDocument | None = None
    page: BasePdfPage | None = None
    viewport: Dimensions | None = None
    frame: RasterFrame | None = None
    image: EncodedImage | None = None
    key: StorageKey | None = None
    public_url: str = ""


class PipelineStep(ABC):
    stage: str = ""

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
