import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.buffer.editor import EditorLauncher, ProcessLauncher, SubprocessLauncher
from app.buffer.store import TextBuffer
from app.config import LISTEN_HOST, LISTEN_PORT, Settings
from app.routers import editor as editor_router
from app.routers import text as text_router
from voice.router import router as voice_router


log = logging.getLogger("voice_gateway.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=logging.INFO)
    settings: Settings = app.state.settings
    log.info("gateway listening on http://localhost:%d", LISTEN_PORT)
    log.info(
        "default voice service (the page's host field takes precedence): http://%s:%s",
        settings.voice_host or "<not set, supplied by the page>",
        settings.voice_port,
    )
    log.info("each request resolves its voice service from the host the page sends")
    yield


def create_app(
    settings: Optional[Settings] = None,
    launcher: Optional[ProcessLauncher] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    load_dotenv(override=False)
    settings = settings or Settings()
    app = FastAPI(title="TTS Gateway", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.voice_transport = transport
    app.state.text_buffer = TextBuffer(settings.text_file)
    app.state.editor_launcher = EditorLauncher(
        path=settings.text_file,
        launcher=launcher or SubprocessLauncher(),
        emeditor_path=settings.emeditor_path,
    )

    origins = settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins.split(",") if origins != "*" else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "invalid request", "detail": str(exc)})

    @app.exception_handler(Exception)
    async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
        log.exception("unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "internal error", "detail": str(exc)})

    app.include_router(voice_router)
    app.include_router(text_router.router)
    app.include_router(editor_router.router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=LISTEN_HOST, port=LISTEN_PORT)


if __name__ == "__main__":
    run()
