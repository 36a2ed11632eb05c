import re
from urllib.parse import unquote, urlsplit

from app.storage.models import StorageKey

_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)


class KeyDeriver:
    """Maps a source URL to a stable thumbnail key.

    The same URL always yields the same key, so re-processing a document
    overwrites its previous thumbnail.
    """

    def __init__(self, bucket: str, prefix: str = "test", default_base_name: str = "file") -> None:
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._default_base_name = default_base_name

    def derive(self, url: str) -> StorageKey:
        file_name = f"thumb-{self.base_name(url)}.png"
        path = f"{self._prefix}/{file_name}" if self._prefix else file_name
        return StorageKey(bucket=self._bucket, path=path)

    def base_name(self, url: str) -> str:
        """Decoded last path segment of ``url`` without a ``.pdf`` suffix."""
        segment = urlsplit(url).path.rsplit("/", 1)[-1]
        name = _PDF_SUFFIX.sub("", unquote(segment))
        return name or self._default_base_name


def looks_like_pdf_url(url: str) -> bool:
    """True if the URL's last path segment ends in ``.pdf``."""
    segment = unquote(urlsplit(url).path.rsplit("/", 1)[-1])
    return bool(_PDF_SUFFIX.search(segment))
