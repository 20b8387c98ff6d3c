"""FastAPI application exposing the command compiler and payload extractors."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from app.main import build_service
from core.command_parser import parsing_insights
from core.command_service import CommandService
from core.envelope import unwrap_envelope, validate_envelope
from core.payload_extractor import PayloadExtractionError, extract_structured_payload

logger = logging.getLogger(__name__)


class CompileRequest(BaseModel):
    message: str
    session_token: Optional[str] = None


class ExtractRequest(BaseModel):
    text: str


class UnwrapRequest(BaseModel):
    envelope: Dict[str, Any] = Field(default_factory=dict)
    strict: bool = False


def _extraction_error(exc: PayloadExtractionError) -> HTTPException:
    logger.info("Payload extraction failed (%s): %s", exc.kind, exc)
    return HTTPException(status_code=422, detail=exc.to_dict())


def create_app(service: Optional[CommandService] = None) -> FastAPI:
    """Build the API; tests pass their own ``CommandService``."""

    app = FastAPI(title="Admin Command Compiler")
    app.state.service = service or build_service()

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        return {
            "status": "ok",
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.post("/api/compile")
    def compile_request(payload: CompileRequest) -> Dict[str, Any]:
        """WHAT: compile one admin request into a risk-scored execution plan.

        HOW: reject blank messages with 400, otherwise return the command,
        insights, outcome label and dashboard metadata.
        """
        clean = (payload.message or "").strip()
        if not clean:
            raise HTTPException(status_code=400, detail="Message is required.")
        service: CommandService = app.state.service
        command = service.compile(clean, session_token=payload.session_token)
        return {
            "command": command.to_dict(),
            "insights": parsing_insights(command),
            "outcome": service.outcome(command),
            "metadata": service.build_metadata(command),
        }

    @app.post("/api/extract")
    def extract_payload(payload: ExtractRequest) -> Dict[str, Any]:
        try:
            value = extract_structured_payload(payload.text)
        except PayloadExtractionError as exc:
            raise _extraction_error(exc) from exc
        return {"payload": value}

    @app.post("/api/unwrap")
    def unwrap_response(payload: UnwrapRequest) -> Dict[str, Any]:
        """Unwrap a tool response envelope; ``strict`` validates the full envelope first."""
        try:
            if payload.strict:
                validate_envelope(payload.envelope)
            value = unwrap_envelope(payload.envelope)
        except PayloadExtractionError as exc:
            raise _extraction_error(exc) from exc
        return {"payload": value}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    from app.config import get_web_ui_host, get_web_ui_port

    uvicorn.run(
        "app.web_api:app",
        host=get_web_ui_host(),
        port=get_web_ui_port(),
        reload=False,
    )
