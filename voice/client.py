from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import httpx


DEFAULT_AUDIO_TYPE = "audio/mpeg"
SYNTH_PARAMS = ("text", "speed", "volume", "pitch", "voice")


@dataclass
class VoiceClient:
    """Thin async client for the upstream voice service.

    Every method makes exactly one request against ``base_url`` and raises
    ``httpx.HTTPError`` (or a subclass) on transport failures and non-2xx
    answers. Nothing is retried.
    """

    base_url: str
    timeout_s: float = 60.0
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=self.transport)

    async def list_voices(self) -> Any:
        async with self._client(self.timeout_s) as client:
            r = await client.get("/voices")
            r.raise_for_status()
            return r.json()

    async def synthesize(self, params: Dict[str, Optional[str]]) -> Tuple[bytes, str]:
        query = {k: v for k, v in params.items() if k in SYNTH_PARAMS and v is not None}
        async with self._client(self.timeout_s) as client:
            r = await client.get("/forward", params=query)
            r.raise_for_status()
            return r.content, r.headers.get("content-type") or DEFAULT_AUDIO_TYPE

    async def ping(self, timeout_s: float = 2.0) -> None:
        """Probe the voices route; the whole exchange is bounded by ``timeout_s``."""
        try:
            await asyncio.wait_for(self._probe(timeout_s), timeout=timeout_s)
        except asyncio.TimeoutError:
            raise httpx.TimeoutException(f"no answer within {timeout_s}s") from None

    async def _probe(self, timeout_s: float) -> None:
        async with self._client(timeout_s) as client:
            r = await client.get("/voices")
            r.raise_for_status()


def error_body(exc: Exception) -> Any:
    """Return the upstream's own error payload, if the upstream answered."""
    if not isinstance(exc, httpx.HTTPStatusError):
        return None
    resp = exc.response
    try:
        return resp.json()
    except ValueError:
        return resp.text or None
