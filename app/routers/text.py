from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.buffer.store import TextBuffer


log = logging.getLogger("voice_gateway.text")

router = APIRouter(prefix="/api", tags=["text"])


class SaveTextRequest(BaseModel):
    text: Optional[str] = None


def get_text_buffer(request: Request) -> TextBuffer:
    return request.app.state.text_buffer


@router.post("/save-text")
async def save_text(request: Request, req: Optional[SaveTextRequest] = None):
    buf = get_text_buffer(request)
    text = req.text if req is not None else None
    try:
        await asyncio.to_thread(buf.save, text)
    except OSError as e:
        log.error("saving %s failed: %s", buf.path, e)
        return JSONResponse(status_code=500, content={"error": "failed to save text", "detail": str(e)})
    return {"success": True}


@router.get("/load-text")
async def load_text(request: Request) -> dict:
    text = await asyncio.to_thread(get_text_buffer(request).load)
    return {"text": text}
