"""FastAPI web server exposing the autopilot import endpoint."""

import logging
import re

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_remote_config
from .errors import ImportFailure, InvalidRequest, MethodNotAllowed
from .export import files_to_dict, history_to_dict
from .importer import fetch_project_files, import_remote_project

logger = logging.getLogger(__name__)

app = FastAPI(title="autopilot-import", version="0.1.0")

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _error_status(exc: ImportFailure) -> int:
    if isinstance(exc, InvalidRequest):
        return 400
    if isinstance(exc, MethodNotAllowed):
        return 405
    return 500


async def _read_project_hex(request: Request) -> str:
    """Extract and validate ``projectHex`` from the JSON request body."""
    try:
        body = await request.json()
    except ValueError:
        raise InvalidRequest("Invalid JSON body")
    if not isinstance(body, dict):
        raise InvalidRequest("Invalid JSON body")

    project_hex = body.get("projectHex")
    if not project_hex:
        raise InvalidRequest("Missing projectHex parameter")
    if not isinstance(project_hex, str) or not _HEX_RE.match(project_hex):
        raise InvalidRequest("Invalid projectHex parameter")
    return project_hex


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """Give 405s the JSON error body; other HTTP errors keep the default."""
    if exc.status_code == 405:
        not_allowed = MethodNotAllowed()
        return _error(_error_status(not_allowed), str(not_allowed))
    return await http_exception_handler(request, exc)


# ── Routes ───────────────────────────────────────────────────────


@app.post("/api/autopilot/import")
async def import_project(request: Request):
    """Return the project name and raw files of an autopilot project."""
    try:
        project_hex = await _read_project_hex(request)
        project_name, files = await fetch_project_files(project_hex, get_remote_config())
    except ImportFailure as e:
        status = _error_status(e)
        if status == 500:
            logger.error("Import failed: %s", e)
        return _error(status, str(e))
    except Exception as e:
        logger.exception("Unexpected error during import")
        return _error(500, str(e))

    return files_to_dict(project_name, files)


@app.post("/api/autopilot/chat")
async def import_chat(request: Request):
    """Return an autopilot project as a complete chat history item."""
    try:
        project_hex = await _read_project_hex(request)
        item = await import_remote_project(project_hex, get_remote_config())
    except ImportFailure as e:
        status = _error_status(e)
        if status == 500:
            logger.error("Chat import failed: %s", e)
        return _error(status, str(e))
    except Exception as e:
        logger.exception("Unexpected error during chat import")
        return _error(500, str(e))

    return history_to_dict(item)

