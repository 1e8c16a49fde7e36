import inspect
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from openai import AsyncOpenAI

from routes.analyze_route import router as analyze_router
from utils.config import Settings, configure_logging, load_settings
from utils.errors import AnalysisError

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize the OpenAI-compatible async client
    and attach it to `app.state`.
    """
    settings: Settings = app.state.settings
    api_key = settings.require_api_key()

    try:
        # Every analysis is a single round-trip; the SDK must not retry on its own.
        openai_client = AsyncOpenAI(api_key=api_key, base_url=settings.base_url, max_retries=0)
    except Exception as exc:
        raise RuntimeError("Failed to initialize OpenAI Async client") from exc

    app.state.openai_client = openai_client
    LOGGER.info("Analysis client ready (base_url=%s)", settings.base_url)

    try:
        yield
    finally:
        client = getattr(app.state, "openai_client", None)
        if client is not None:
            aclose = getattr(client, "aclose", None) or getattr(client, "close", None)
            if aclose is not None:
                try:
                    if inspect.iscoroutinefunction(aclose):
                        await aclose()
                    else:
                        result = aclose()
                        if inspect.isawaitable(result):
                            await result
                except Exception as exc:
                    LOGGER.warning("Error while closing the OpenAI client: %s", exc)


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    """Render analysis failures in the `{"error": ...}` envelope."""
    if exc.status_code >= 500:
        LOGGER.error("Analysis request failed: %s", exc.message)
    else:
        LOGGER.warning("Rejected analysis request: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject bodies that are not a JSON object with the expected fields."""
    LOGGER.warning("Invalid request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Image Analysis Hub", lifespan=lifespan)
    app.state.settings = settings

    app.add_exception_handler(AnalysisError, analysis_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Serve static assets from the public directory, if it exists.
    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the upload and review page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check that reports whether the OpenAI client is available.
        """
        has_openai = getattr(request.app.state, "openai_client", None) is not None
        return {"ok": True, "openai_available": has_openai}

    app.include_router(analyze_router)

    return app


app = create_app()
