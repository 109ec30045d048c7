"""
Orchestrator API entrypoint.

Serves:
- /health/live: Liveness probe
- /: Service info
- POST /plans: Create a plan for a goal, optionally executing it

Can be run as a module:
  python -m orchestration.api
"""

import argparse
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from config import Config, configure_logging
from infra import ConfigurationError, InfraBootstrap

from .errors import OrchestrationError, PlanParseError, ProviderError, ValidationError
from .rendering import plan_to_dict

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

_ERROR_STATUS = {
    ValidationError: 400,
    PlanParseError: 422,
    ProviderError: 502,
}


class PlanRequestBody(BaseModel):
    """POST /plans payload."""

    model_config = ConfigDict(populate_by_name=True)

    goal: str
    tech_stack: Optional[str] = Field(default=None, alias="techStack")
    execute: bool = False


def _error_response(error: Exception, status_code: int) -> JSONResponse:
    return JSONResponse(
        content={"error": str(error), "type": type(error).__name__},
        status_code=status_code,
    )


def create_app(bootstrap: Optional[InfraBootstrap] = None) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        bootstrap: Wiring to use. When omitted, the process-wide
            InfraBootstrap is created from the environment on first use.
    """
    app = FastAPI(
        title="Plan Orchestrator API",
        description="Turns goals into ordered plans and executes them",
        version=API_VERSION,
    )

    def get_bootstrap() -> InfraBootstrap:
        return bootstrap or InfraBootstrap.get_instance()

    @app.get("/health/live")
    async def live():
        """Liveness probe."""
        return {"status": "alive"}

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Plan Orchestrator API",
            "version": API_VERSION,
            "endpoints": ["/health/live", "/plans"],
        }

    @app.post("/plans")
    async def create_plan(body: PlanRequestBody):
        """Create a plan; run it too when execute is true."""
        try:
            components = get_bootstrap()
        except ConfigurationError as e:
            logger.error(f"Backend not configured: {e}")
            return _error_response(e, 503)

        try:
            plan = await components.get_plan_builder().create_plan(body.goal, body.tech_stack)
        except OrchestrationError as e:
            logger.warning(f"Plan creation failed: {e}")
            return _error_response(e, _ERROR_STATUS.get(type(e), 500))

        if body.execute:
            await components.get_task_runner().execute_plan(plan)

        return JSONResponse(content=plan_to_dict(plan), status_code=201)

    return app


def main(host: str = Config.API_HOST, port: int = Config.API_PORT, reload: bool = False):
    """Run orchestrator API server."""
    if not Config.validate():
        raise SystemExit(1)
    configure_logging(Config.LOG_LEVEL)
    app = create_app()

    print(f"Starting Plan Orchestrator API on {host}:{port}")
    print(f"Health check: http://{host}:{port}/health/live")
    print(f"LLM provider: {Config.LLM_PROVIDER}")

    uvicorn.run(
        app,
        host=host,
        port=port,
        reload=reload,
        log_level=Config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Plan Orchestrator API")
    parser.add_argument("--host", default=Config.API_HOST, help="Host to bind to")
    parser.add_argument("--port", type=int, default=Config.API_PORT, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable hot reload")

    args = parser.parse_args()
    main(host=args.host, port=args.port, reload=args.reload)
