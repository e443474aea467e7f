import io
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse

from app.config import resolve_base_url
from .client import VoiceClient, error_body


log = logging.getLogger("voice_gateway.voice")

router = APIRouter(prefix="/api", tags=["voice"])


def get_voice_client(request: Request, host: Optional[str] = None) -> VoiceClient:
    settings = request.app.state.settings
    return VoiceClient(
        base_url=resolve_base_url(host, settings),
        timeout_s=settings.upstream_timeout_s,
        transport=request.app.state.voice_transport,
    )


@router.get("/voices")
async def list_voices(client: VoiceClient = Depends(get_voice_client)):
    log.info("voice service target for this request: %s", client.base_url)
    try:
        voices = await client.list_voices()
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        return JSONResponse(status_code=500, content={"error": "failed to list voices", "detail": str(e)})
    return JSONResponse(content=voices)


@router.get("/forward")
async def forward(
    text: Optional[str] = None,
    speed: Optional[str] = None,
    volume: Optional[str] = None,
    pitch: Optional[str] = None,
    voice: Optional[str] = None,
    client: VoiceClient = Depends(get_voice_client),
):
    params = {"text": text, "speed": speed, "volume": volume, "pitch": pitch, "voice": voice}
    try:
        audio, content_type = await client.synthesize(params)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        backend = error_body(e)
        status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
        log.error("synthesis failed: %s (upstream status %s, body %r)", e, status, backend)
        content = {"error": "synthesis failed", "detail": str(e)}
        if backend is not None:
            content["backend"] = backend
        return JSONResponse(status_code=500, content=content)
    return StreamingResponse(io.BytesIO(audio), media_type=content_type)


@router.get("/ping")
async def ping(request: Request, client: VoiceClient = Depends(get_voice_client)):
    try:
        await client.ping(request.app.state.settings.ping_timeout_s)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "cannot reach voice service", "detail": str(e)},
        )
    return {"success": True}
