"""Infrastructure layer exports."""

from .feed import FeedClient, FeedError
from .history import HistoryStore
from .relay import ChatRelayClient, configure_relay_client, get_relay_client
from .storage import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore

__all__ = [
    "ChatRelayClient",
    "FeedClient",
    "FeedError",
    "FileKeyValueStore",
    "HistoryStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "configure_relay_client",
    "get_relay_client",
]
