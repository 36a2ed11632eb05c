import httpx

from app.config.settings import Settings
from app.fetch.exceptions import FetchError, ReadError, SourceHttpError
from app.logging.logger import Log


def build_http_client(settings: Settings) -> httpx.Client:
    """Build the shared HTTP client used for all source downloads."""
    return httpx.Client(
        timeout=settings.fetch_timeout_seconds,
        follow_redirects=True,
        max_redirects=settings.fetch_max_redirects,
    )


class SourceFetcher:
    """Downloads source documents over HTTP with a bounded body size."""

    def __init__(self, client: httpx.Client, max_bytes: int) -> None:
        self._client = client
        self._max_bytes = max_bytes

    def fetch(self, url: str) -> bytes:
        """Return the response body for ``url``.

        Raises:
            FetchError: if the request cannot be sent or no response arrives.
            SourceHttpError: if the response status is not 2xx.
            ReadError: if the body cannot be read or exceeds the size cap.
        """
        try:
            with self._client.stream("GET", url) as response:
                if not response.is_success:
                    raise SourceHttpError(
                        f"source responded with HTTP {response.status_code}"
                    )
                return self._read_body(response)
        except (SourceHttpError, ReadError):
            raise
        except httpx.StreamError as exc:
            raise ReadError(f"response body could not be read: {exc}") from exc
        except (httpx.TransportError, httpx.TooManyRedirects) as exc:
            raise FetchError(f"request to source failed: {exc}") from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError) as exc:
            raise FetchError(f"invalid source url: {exc}") from exc

    def _read_body(self, response: httpx.Response) -> bytes:
        declared = response.headers.get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self._max_bytes:
            raise ReadError(
                f"declared content length {declared} exceeds limit of {self._max_bytes} bytes"
            )
        chunks: list[bytes] = []
        received = 0
        try:
            for chunk in response.iter_bytes():
                received += len(chunk)
                if received > self._max_bytes:
                    raise ReadError(
                        f"response body exceeds limit of {self._max_bytes} bytes"
                    )
                chunks.append(chunk)
        except httpx.HTTPError as exc:
            raise ReadError(f"response body could not be read: {exc}") from exc
        Log.debug(f"Read {received} bytes from source")
        return b"".join(chunks)
