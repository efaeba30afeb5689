from __future__ import annotations

import json
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field, ValidationError
from starlette.exceptions import HTTPException

from .config import get_settings
from .diligence import DueDiligenceAnalyst


settings = get_settings()

logger = logging.getLogger(__name__)
logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(message)s")

analyst = DueDiligenceAnalyst(settings)

app = FastAPI(title="Due Diligence API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

MISSING_COMPANY = "Falta el nombre de la empresa en el formulario."
SERVER_ERROR = "Error en el servidor."

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class DueDiligenceRequest(BaseModel):
    company_name: str = Field(..., alias="companyName", min_length=1)


async def read_payload(request: Request) -> Dict[str, Any]:
    """Parse a JSON or form body into a dict; anything else reads as empty."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except HTTPException:
            logger.debug("Ignoring malformed form body")
            return {}
        return dict(form)
    if "json" not in content_type:
        return {}
    body = await request.body()
    try:
        data = json.loads(body) if body else {}
    except ValueError:
        logger.debug("Ignoring malformed JSON body")
        return {}
    return data if isinstance(data, dict) else {}


@app.get("/healthz")
async def healthcheck():
    return {
        "status": "ok",
        "openai": bool(settings.openai_api_key),
        "model": settings.openai_model,
    }


@app.post("/due-diligence")
async def due_diligence(request: Request):
    payload = await read_payload(request)
    try:
        body = DueDiligenceRequest.model_validate(payload)
    except ValidationError:
        return JSONResponse(status_code=400, content={"error": MISSING_COMPANY})

    try:
        analysis = await analyst.run(body.company_name)
    except Exception as exc:
        logger.exception("Error in /due-diligence: %s", exc)
        return JSONResponse(status_code=500, content={"error": SERVER_ERROR})
    return {"analysis": analysis}


# mounted last so the API routes above take precedence over "/"
if settings.public_dir.is_dir():
    app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")
else:
    logger.warning("Public directory %s not found; static files are disabled.", settings.public_dir)
