"""HTTP client for the published sheet export."""
from __future__ import annotations

import httpx


class FeedError(RuntimeError):
    """Raised when the sheet export cannot be retrieved."""


class FeedClient:
    """Fetches the comma separated export of the team sheet."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not url:
            raise ValueError("feed url is required")
        self._url = url
        if http_client is not None:
            self._client = http_client
        elif timeout is not None:
            self._client = httpx.Client(timeout=timeout, follow_redirects=True)
        else:
            self._client = httpx.Client(follow_redirects=True)
        self._owns_client = http_client is None

    def fetch_text(self) -> str:
        try:
            response = self._client.get(self._url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FeedError(f"feed returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FeedError(f"feed request failed: {exc}") from exc

        return response.text

    def close(self) -> None:  # pragma: no cover - best effort cleanup
        if self._owns_client:
            self._client.close()


__all__ = ["FeedClient", "FeedError"]
