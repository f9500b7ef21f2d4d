from __future__ import annotations

import asyncio

from fastapi import APIRouter, HTTPException

from backend.core.schema import ChatRequest
from backend.infrastructure import get_relay_client

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
async def send_chat_message(payload: ChatRequest) -> dict:
    """Relay one chat message; failures come back as a bot-authored error reply."""
    if not payload.message.strip():
        raise HTTPException(status_code=400, detail="message must not be empty")

    client = get_relay_client()
    reply = await asyncio.to_thread(client.send, payload.message, sender=payload.sender)
    return reply.model_dump(mode="json")
