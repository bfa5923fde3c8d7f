from __future__ import annotations

import os
import platform
import sys
from datetime import datetime

from fastapi import FastAPI, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .security import require_api_key
from .dispatcher import ShortcutDispatcher, to_response
from .models import ShortcutList, ShortcutRequest
from .store import ShortcutStore, find, touch
from .logging_utils import setup_logger


app = FastAPI(title="Shortcut Hub API", version="1.0.0")

origins = (
    [o.strip() for o in settings.cors_origins.split(",")]
    if getattr(settings, "cors_origins", None)
    else ["*"]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins if origins != ["*"] else ["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger = setup_logger("shortcut_hub", settings.log_level)

DISPATCHER = ShortcutDispatcher(timeout_ms=settings.execution_timeout_ms)
STORE = ShortcutStore(settings.shortcuts_file)


def _internal_error(e: Exception) -> JSONResponse:
    logger.exception("Request failed")
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "details": str(e)},
    )


async def _run(request: ShortcutRequest) -> JSONResponse:
    result = await DISPATCHER.dispatch(request)
    status = 400 if result.rejected else 200
    return JSONResponse(status_code=status, content=to_response(result))


@app.get("/api/health")
def health():
    return {"status": "ok", "timestamp": datetime.now().astimezone().isoformat()}


@app.get("/api/system-info")
def system_info():
    return {
        "platform": sys.platform,
        "arch": platform.machine(),
        "pythonVersion": platform.python_version(),
        "cwd": os.getcwd(),
    }


@app.post("/api/execute", dependencies=[Depends(require_api_key)])
async def execute_shortcut(request: ShortcutRequest):
    return await _run(request)


@app.get("/api/shortcuts", dependencies=[Depends(require_api_key)])
def list_shortcuts():
    try:
        records = STORE.load()
    except Exception as e:
        return _internal_error(e)
    return {"success": True, "shortcuts": [r.model_dump(mode="json") for r in records]}


@app.post("/api/shortcuts", dependencies=[Depends(require_api_key)])
def save_shortcuts(payload: ShortcutList):
    if not STORE.save(payload.shortcuts):
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Failed to save shortcuts"},
        )
    return {"success": True, "count": len(payload.shortcuts)}


@app.post("/api/shortcuts/{shortcut_id}/execute", dependencies=[Depends(require_api_key)])
async def execute_saved_shortcut(shortcut_id: str):
    try:
        records = await run_in_threadpool(STORE.load)
    except Exception as e:
        return _internal_error(e)

    record = find(records, shortcut_id)
    if record is None:
        raise HTTPException(404, detail=f"Shortcut not found: {shortcut_id}")

    # Stamp lastUsed before running, as the UI does for direct executions
    stamped = [touch(r) if r.id == shortcut_id else r for r in records]
    if not await run_in_threadpool(STORE.save, stamped):
        logger.warning(f"Could not record lastUsed for shortcut {shortcut_id}")
    return await _run(record.to_request())


def run():
    import uvicorn

    logger.info(f"Shortcut Hub server running on http://{settings.host}:{settings.port}")
    logger.info(f"Platform: {sys.platform}")
    logger.info(f"Working directory: {os.getcwd()}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
