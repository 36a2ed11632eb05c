import io
from collections.abc import Callable
from unittest.mock import MagicMock

import httpx
import pytest
from PIL import Image

from app.config.settings import Settings
from app.processor.processor import build_processor

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.mark.integration
@pytest.mark.parametrize("engine", ["pymupdf", "pdfplumber"])
class TestThumbnailPipeline:
    def test_round_trip_uploads_png(
        self,
        engine: str,
        make_settings: Callable[..., Settings],
        http_client: httpx.Client,
        s3_client: MagicMock,
    ) -> None:
        processor = build_processor(make_settings(pdf_engine=engine), http_client, s3_client)

        result = processor.process("https://docs.example.com/files/report.pdf")

        assert result.success is True
        assert result.path == "test/thumb-report.png"
        assert result.public_url == "https://media.example.com/test/thumb-report.png"
        s3_client.put_object.assert_called_once()
        kwargs = s3_client.put_object.call_args.kwargs
        assert kwargs["Bucket"] == "thumbs"
        assert kwargs["Key"] == "test/thumb-report.png"
        assert kwargs["ContentType"] == "image/png"
        assert kwargs["Body"].startswith(PNG_SIGNATURE)
        with Image.open(io.BytesIO(kwargs["Body"])) as thumbnail:
            assert thumbnail.size == (918, 1188)

    def test_unreachable_source(
        self,
        engine: str,
        make_settings: Callable[..., Settings],
        http_client: httpx.Client,
        s3_client: MagicMock,
    ) -> None:
        processor = build_processor(make_settings(pdf_engine=engine), http_client, s3_client)

        result = processor.process("https://unreachable.invalid/report.pdf")

        assert result.success is False
        assert result.status_code == 500
        assert result.error == "Failed to fetch PDF from url"
        s3_client.put_object.assert_not_called()

    def test_missing_source_returns_400(
        self,
        engine: str,
        make_settings: Callable[..., Settings],
        http_client: httpx.Client,
        s3_client: MagicMock,
    ) -> None:
        processor = build_processor(make_settings(pdf_engine=engine), http_client, s3_client)

        result = processor.process("https://docs.example.com/files/gone.pdf")

        assert result.status_code == 400
        assert result.details == "source responded with HTTP 404"
        s3_client.put_object.assert_not_called()

    def test_non_pdf_body_fails_to_decode(
        self,
        engine: str,
        make_settings: Callable[..., Settings],
        http_client: httpx.Client,
        s3_client: MagicMock,
        source_documents: dict[str, bytes],
    ) -> None:
        source_documents["/files/fake.pdf"] = b"<html><body>Not found</body></html>"
        processor = build_processor(make_settings(pdf_engine=engine), http_client, s3_client)

        result = processor.process("https://docs.example.com/files/fake.pdf")

        assert result.status_code == 500
        assert result.error == "Failed to load PDF document"
        assert result.details
        s3_client.put_object.assert_not_called()

    def test_oversized_source_fails_to_read(
        self,
        engine: str,
        make_settings: Callable[..., Settings],
        http_client: httpx.Client,
        s3_client: MagicMock,
    ) -> None:
        settings = make_settings(pdf_engine=engine, fetch_max_bytes=100)
        processor = build_processor(settings, http_client, s3_client)

        result = processor.process("https://docs.example.com/files/report.pdf")

        assert result.error == "Failed to read PDF data"
        s3_client.put_object.assert_not_called()

    def test_rejects_non_pdf_url_when_required(
        self,
        engine: str,
        make_settings: Callable[..., Settings],
        http_client: httpx.Client,
        s3_client: MagicMock,
    ) -> None:
        settings = make_settings(pdf_engine=engine, require_pdf_url=True)
        processor = build_processor(settings, http_client, s3_client)

        result = processor.process("https://docs.example.com/files/report")

        assert result.status_code == 400
        assert result.error == "URL does not reference a PDF document"

    def test_private_bucket_returns_signed_url(
        self,
        engine: str,
        make_settings: Callable[..., Settings],
        http_client: httpx.Client,
        s3_client: MagicMock,
    ) -> None:
        s3_client.generate_presigned_url.return_value = "https://signed.example/thumb-report.png"
        settings = make_settings(
            pdf_engine=engine,
            storage_public_read=False,
            storage_signed_url_expires_seconds=900,
        )
        processor = build_processor(settings, http_client, s3_client)

        result = processor.process("https://docs.example.com/files/report.pdf")

        assert result.success is True
        assert result.public_url == "https://signed.example/thumb-report.png"
        s3_client.generate_presigned_url.assert_called_once_with(
            "get_object",
            Params={"Bucket": "thumbs", "Key": "test/thumb-report.png"},
            ExpiresIn=900,
        )
