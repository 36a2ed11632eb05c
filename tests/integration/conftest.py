from collections.abc import Callable, Generator
from unittest.mock import MagicMock

import httpx
import pytest

from app.config.settings import Settings

PUBLIC_BASE_URL = "https://media.example.com"


def _test_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "storage_bucket_name": "thumbs",
        "storage_public_base_url": PUBLIC_BASE_URL,
        "thumbnail_key_prefix": "test",
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    return _test_settings


@pytest.fixture
def source_documents(sample_pdf_bytes: bytes) -> dict[str, bytes]:
    """Path -> body served by the fake source host. Unknown paths 404."""
    return {"/files/report.pdf": sample_pdf_bytes}


@pytest.fixture
def http_client(source_documents: dict[str, bytes]) -> Generator[httpx.Client, None, None]:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "unreachable.invalid":
            raise httpx.ConnectError("name resolution failed", request=request)
        body = source_documents.get(request.url.path)
        if body is None:
            return httpx.Response(404)
        return httpx.Response(200, content=body, headers={"Content-Type": "application/pdf"})

    client = httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
    try:
        yield client
    finally:
        client.close()


@pytest.fixture
def s3_client() -> MagicMock:
    return MagicMock()
