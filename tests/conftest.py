from typing import Callable, List, Optional, Sequence

import httpx
import pytest
from fastapi.testclient import TestClient

from app.buffer.editor import EditorLaunchError
from app.config import Settings
from app.main import create_app


class RecordingLauncher:
    """Stands in for SubprocessLauncher; records argv instead of spawning."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.error: Optional[str] = None

    def launch(self, argv: Sequence[str]) -> None:
        self.calls.append(list(argv))
        if self.error:
            raise EditorLaunchError(self.error)


class FakeVoiceService:
    """httpx MockTransport handler playing the upstream voice service."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = self.default

    @staticmethod
    def default(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/voices":
            return httpx.Response(200, json=[{"name": "alice"}, {"name": "bob"}])
        return httpx.Response(200, content=b"ID3\x00audio", headers={"content-type": "audio/wav"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    for name in ("VOICE_HOST", "VOICE_PORT", "TEXT_FILE", "EMEDITOR_PATH", "ALLOWED_ORIGINS", "VOICE_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)
    return Settings(text_file=tmp_path / "text.txt", emeditor_path="emeditor.exe")


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def voice() -> FakeVoiceService:
    return FakeVoiceService()


@pytest.fixture
def client(settings, launcher, voice):
    app = create_app(settings=settings, launcher=launcher, transport=httpx.MockTransport(voice))
    with TestClient(app) as c:
        yield c
