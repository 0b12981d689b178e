"""
Rerender HTTP API — FastAPI shell around ``analyze``.

  POST /analyze  → {"code": str} in, analysis report out
  GET  /health   → {"status": "ok"}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from rerender import __version__
from rerender.config.schema import RerenderConfig
from rerender.output import json_report
from rerender.rules.registry import RuleRegistry, default_registry
from rerender.scanner.engine import analyze

logger = logging.getLogger(__name__)

MISSING_CODE_BODY = {
    "error": 'Missing "code" parameter in the request body.',
    "expectedFormat": '{"code": "..."}',
}


class AnalyzeRequest(BaseModel):
    # Any JSON value; non-strings reach the engine, which answers with an Error report
    code: Any = None


def create_router(config: RerenderConfig, registry: RuleRegistry) -> APIRouter:
    router = APIRouter()
    max_bytes = config.max_input_bytes

    @router.get("/")
    async def root():
        return {"name": "rerender", "version": __version__}

    @router.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok", "rules": len(registry.enabled_rules())}

    @router.post("/analyze")
    def analyze_code(req: Optional[AnalyzeRequest] = None):
        """Run the analysis engine on the submitted code."""
        if req is None or req.code is None:
            return JSONResponse(status_code=400, content=MISSING_CODE_BODY)

        if isinstance(req.code, str) and len(req.code.encode("utf-8")) > max_bytes:
            logger.warning("Rejected %d-char input above %d bytes", len(req.code), max_bytes)
            return JSONResponse(
                status_code=413,
                content={
                    "error": f"Code exceeds maximum size of {config.scan.max_input_kb} KB."
                },
            )

        report = analyze(req.code, registry)
        logger.info("POST /analyze → %s (%d issues)", report.status.value, report.total_issues)
        return json_report.to_dict(report)

    return router


def create_app(
    config: Optional[RerenderConfig] = None,
    registry: Optional[RuleRegistry] = None,
) -> FastAPI:
    """Build the application. Rule loading errors surface here, at startup."""
    if config is None:
        config = RerenderConfig()
    if registry is None:
        registry = default_registry()

    app = FastAPI(
        title="Rerender",
        description="Static heuristics for React re-render and accessibility issues",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(create_router(config, registry))
    return app


app = create_app()
