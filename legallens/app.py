import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from legallens.application import UploadController, configure_upload_controller
from legallens.core.monitoring import setup_logging
from legallens.infrastructure import AnalysisServiceClient
from legallens.presentation import ResultRevealSignal
from legallens.routes import workflow


DEFAULT_TIMEOUT = 30.0
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _timeout_from_env() -> float | None:
    raw = os.getenv("ANALYSIS_API_TIMEOUT")
    if raw is None:
        return DEFAULT_TIMEOUT
    value = raw.strip().lower()
    if value in {"", "none", "off"}:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"ANALYSIS_API_TIMEOUT must be a number of seconds or 'none', got {raw!r}") from exc


def _cors_origins_from_env() -> list[str]:
    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def build_controller() -> UploadController:
    api_base = os.getenv("ANALYSIS_API_BASE") or "http://localhost:8000"
    client = AnalysisServiceClient(api_base, timeout=_timeout_from_env())
    return UploadController(client)


def create_app(controller: UploadController | None = None) -> FastAPI:
    setup_logging(os.getenv("LEGALLENS_LOG_LEVEL") or "INFO")

    controller = controller or build_controller()
    configure_upload_controller(controller)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        await controller.aclose()

    app = FastAPI(title="LegalLens", version="0.0.1", lifespan=lifespan)

    reveal_signal = ResultRevealSignal()
    controller.subscribe(reveal_signal)
    app.state.reveal_signal = reveal_signal

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins_from_env(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(workflow.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "LegalLens",
                "docs": "/docs",
                "workflow": "/api/workflow",
            }
        )

    return app


app = create_app()
