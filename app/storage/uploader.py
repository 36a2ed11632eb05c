from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from app.imaging.models import EncodedImage
from app.logging.logger import Log
from app.storage.exceptions import SignedUrlError, UploadError
from app.storage.models import StorageKey


# R2 caps presigned URLs at seven days.
MAX_SIGNED_URL_SECONDS = 604_800


class ObjectStorageUploader:
    """Puts thumbnails into an S3-compatible bucket and builds public URLs."""

    def __init__(self, client: Any, public_base_url: str) -> None:
        self._client = client
        self._public_base_url = public_base_url.rstrip("/")

    def upload(self, key: StorageKey, image: EncodedImage) -> None:
        """Store ``image`` at ``key``, replacing any existing object.

        Raises:
            UploadError: on transport or storage-service failure. The public
                detail carries only the error code.
        """
        try:
            self._client.put_object(
                Bucket=key.bucket,
                Key=key.path,
                Body=image.data,
                ContentType=image.content_type,
            )
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "ClientError")
            raise UploadError(
                f"put_object {key.bucket}/{key.path} failed: {exc}",
                public_detail=f"storage error: {code}",
            ) from exc
        except BotoCoreError as exc:
            raise UploadError(
                f"put_object {key.bucket}/{key.path} failed: {exc}",
                public_detail=f"storage error: {type(exc).__name__}",
            ) from exc
        Log.info(f"Uploaded {image.size} bytes to {key.bucket}/{key.path}")

    def public_url(self, key: StorageKey) -> str:
        """Public URL of ``key``; only resolvable for public-read buckets."""
        return f"{self._public_base_url}/{key.path}"

    def signed_url(self, key: StorageKey, expires_in: int = MAX_SIGNED_URL_SECONDS) -> str:
        """Presigned GET URL for ``key``, usable on private buckets.

        ``expires_in`` is clamped to seven days. Signing is local, no request
        is sent to the store.

        Raises:
            ValueError: if ``expires_in`` is not positive.
            SignedUrlError: if the client cannot sign, e.g. missing credentials.
        """
        if expires_in <= 0:
            raise ValueError(f"expires_in must be positive, got {expires_in}")
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": key.bucket, "Key": key.path},
                ExpiresIn=min(expires_in, MAX_SIGNED_URL_SECONDS),
            )
        except (BotoCoreError, ClientError) as exc:
            raise SignedUrlError(
                f"presign get_object {key.bucket}/{key.path} failed: {exc}",
                public_detail=f"storage error: {type(exc).__name__}",
            ) from exc
