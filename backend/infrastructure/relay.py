"""Forwarding of chat messages to the automation webhook."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from backend.core.schema import ChatReply

logger = logging.getLogger(__name__)

SUCCESS_FALLBACK = "Message sent successfully to the workflow!"
ERROR_MESSAGE = "Sorry, there was an error sending your message to the workflow. Please try again."


class ChatRelayClient:
    """Posts ``{message, timestamp, sender}`` to the webhook, once per send."""

    def __init__(
        self,
        url: str | None,
        *,
        timeout: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._owns_client = http_client is None and bool(url)
        if http_client is not None or not url:
            self._client = http_client
        elif timeout is not None:
            self._client = httpx.Client(timeout=timeout)
        else:
            self._client = httpx.Client()

    def send(self, message: str, *, sender: str = "chatbot-user", now: datetime | None = None) -> ChatReply:
        if not self._url or self._client is None:
            logger.warning("chat relay url is not configured")
            return ChatReply(ok=False, content=ERROR_MESSAGE)

        payload = {
            "message": message,
            "timestamp": (now or datetime.now(timezone.utc)).isoformat(),
            "sender": sender,
        }
        try:
            response = self._client.post(self._url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("chat relay failed: %s", exc)
            return ChatReply(ok=False, content=ERROR_MESSAGE)

        return ChatReply(ok=True, content=response.text or SUCCESS_FALLBACK)

    def close(self) -> None:  # pragma: no cover - best effort cleanup
        if self._owns_client and self._client is not None:
            self._client.close()


_client: ChatRelayClient = ChatRelayClient(None)


def configure_relay_client(client: ChatRelayClient) -> None:
    """Install the relay client used by the chat route."""

    global _client
    _client = client


def get_relay_client() -> ChatRelayClient:
    return _client


__all__ = ["ChatRelayClient", "configure_relay_client", "get_relay_client"]
