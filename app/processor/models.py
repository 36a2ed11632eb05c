from dataclasses import dataclass

from app.processor.exceptions import ErrorKind, StageError


@dataclass(frozen=True)
class SourceReference:
    """Identity of the document to process."""

    url: str


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one pipeline run."""

    success: bool
    status_code: int
    stage: str
    path: str | None = None
    public_url: str | None = None
    error: str | None = None
    details: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def succeeded(cls, path: str, public_url: str) -> "PipelineResult":
        return cls(
            success=True,
            status_code=200,
            stage="finalize",
            path=path,
            public_url=public_url,
        )

    @classmethod
    def failed(cls, stage: str, exc: StageError) -> "PipelineResult":
        return cls(
            success=False,
            status_code=exc.status_code,
            stage=stage,
            error=exc.message,
            details=exc.public_detail,
            error_kind=exc.kind,
        )

    def to_response(self) -> dict[str, object]:
        """JSON body for callers; absent fields are omitted."""
        body: dict[str, object] = {"success": self.success}
        if self.path is not None:
            body["path"] = self.path
        if self.public_url is not None:
            body["publicUrl"] = self.public_url
        if self.error is not None:
            body["error"] = self.error
        if self.details is not None:
            body["details"] = self.details
        return body
