from __future__ import annotations

import asyncio
import sys
import threading
from pathlib import Path

import httpx

sys.path.append(str(Path(__file__).resolve().parents[1]))

from backend.application import DashboardService
from backend.infrastructure import FeedClient, HistoryStore, InMemoryKeyValueStore
from backend.workers.poller import FeedPoller

FEED_URL = "https://sheets.example.test/export?format=csv"
CSV_TEXT = "date,employeeName,work,status\n01-15-24,Abdullah,Fix pump,working\n01-15-24,Ayesha,Order parts,pending\n"


def _service(handler) -> tuple[DashboardService, httpx.Client]:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    feed = FeedClient(FEED_URL, http_client=http_client)
    return DashboardService(HistoryStore(InMemoryKeyValueStore()), feed), http_client


def test_poller_refreshes_immediately_and_on_every_tick():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, text=CSV_TEXT)

    service, http_client = _service(handler)

    async def scenario() -> None:
        poller = FeedPoller(service, interval=0.05)
        poller.start()
        poller.start()
        await asyncio.sleep(0.2)
        assert poller.running
        await poller.stop()
        assert not poller.running

    asyncio.run(scenario())

    assert len(calls) >= 2
    assert len(service.snapshot) == 2
    assert len(service.history) == 2
    http_client.close()


def test_failed_refresh_keeps_last_good_state():
    responses = [httpx.Response(200, text=CSV_TEXT), httpx.Response(500)]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    service, http_client = _service(handler)
    poller = FeedPoller(service, interval=30)

    assert asyncio.run(poller.refresh_once()) is True
    assert asyncio.run(poller.refresh_once()) is False

    status = service.get_status()
    assert len(service.snapshot) == 2
    assert len(service.history) == 2
    assert status["failure_count"] == 1
    assert status["last_fetch"]["status"] == "failed"
    assert "500" in status["last_fetch"]["error"]
    http_client.close()


def test_slow_fetch_does_not_block_the_next_tick():
    release = threading.Event()
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            release.wait(timeout=2)
        return httpx.Response(200, text=CSV_TEXT)

    service, http_client = _service(handler)

    async def scenario() -> None:
        poller = FeedPoller(service, interval=0.05)
        poller.start()
        await asyncio.sleep(0.25)
        assert len(calls) >= 2
        release.set()
        await poller.stop()

    asyncio.run(scenario())

    assert len(service.history) == 2
    http_client.close()
