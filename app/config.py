from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_VOICE_HOST = "172.31.27.59"
DEFAULT_VOICE_PORT = "8774"
DEFAULT_EMEDITOR_PATH = r"C:\Program Files (x86)\EmEditor\EmEditor.exe"

LISTEN_HOST = "0.0.0.0"
LISTEN_PORT = 3000

# text.txt lives next to the program, one level above the app package
_DEFAULT_TEXT_FILE = Path(__file__).resolve().parent.parent / "text.txt"


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


class Settings(BaseModel):
    voice_host: Optional[str] = Field(default_factory=lambda: _env("VOICE_HOST") or None)
    voice_port: str = Field(default_factory=lambda: _env("VOICE_PORT") or DEFAULT_VOICE_PORT)
    text_file: Path = Field(default_factory=lambda: Path(_env("TEXT_FILE") or _DEFAULT_TEXT_FILE))
    upstream_timeout_s: float = Field(default_factory=lambda: float(_env("VOICE_TIMEOUT_S", "60")))
    ping_timeout_s: float = 2.0
    emeditor_path: str = Field(default_factory=lambda: _env("EMEDITOR_PATH") or DEFAULT_EMEDITOR_PATH)
    allowed_origins: str = Field(default_factory=lambda: _env("ALLOWED_ORIGINS", "*") or "*")


def resolve_host(host: Optional[str], settings: Settings) -> str:
    # Priority: ?host= > VOICE_HOST > default
    if host:
        return host
    if settings.voice_host:
        return settings.voice_host
    return DEFAULT_VOICE_HOST


def resolve_base_url(host: Optional[str], settings: Settings) -> str:
    return f"http://{resolve_host(host, settings)}:{settings.voice_port}"
