from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.buffer.editor import EditorLaunchError, UnsupportedEditorError


log = logging.getLogger("voice_gateway.editor")

router = APIRouter(prefix="/api", tags=["editor"])


class OpenEditorRequest(BaseModel):
    editor: Optional[str] = None


@router.post("/open-editor")
async def open_editor(request: Request, req: Optional[OpenEditorRequest] = None):
    launcher = request.app.state.editor_launcher
    editor = req.editor if req is not None else None
    try:
        await asyncio.to_thread(launcher.open, editor)
    except UnsupportedEditorError:
        return JSONResponse(status_code=400, content={"error": "unsupported editor"})
    except (EditorLaunchError, OSError) as e:
        log.error("opening %s failed: %s", editor, e)
        return JSONResponse(status_code=500, content={"error": "failed to open editor", "detail": str(e)})
    return {"success": True}
