from typing import Any

import boto3
from botocore.config import Config

from app.config.settings import Settings


def storage_endpoint_url(settings: Settings) -> str:
    """Explicit endpoint if configured, otherwise the R2 account endpoint."""
    if settings.storage_endpoint_url:
        return settings.storage_endpoint_url
    if not settings.storage_account_id:
        raise ValueError("storage_account_id or storage_endpoint_url must be set")
    return f"https://{settings.storage_account_id}.r2.cloudflarestorage.com"


def build_s3_client(settings: Settings) -> Any:
    """Build the shared S3-compatible client. boto3 clients are thread-safe."""
    return boto3.client(
        "s3",
        endpoint_url=storage_endpoint_url(settings),
        region_name=settings.storage_region,
        aws_access_key_id=settings.storage_access_key_id,
        aws_secret_access_key=settings.storage_secret_access_key,
        config=Config(
            connect_timeout=settings.storage_connect_timeout_seconds,
            read_timeout=settings.storage_read_timeout_seconds,
            retries={"max_attempts": settings.storage_max_attempts, "mode": "standard"},
            # R2 does not accept the default flexible checksums.
            request_checksum_calculation="when_required",
            response_checksum_validation="when_required",
        ),
    )
