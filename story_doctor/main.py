"""FastAPI application entry point."""

import asyncio
import contextlib
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from story_doctor import __version__
from story_doctor.api import router as api_router
from story_doctor.core.config import Settings, get_settings
from story_doctor.core.llm import build_text_generator
from story_doctor.core.logging import get_logger
from story_doctor.core.question_supply import QuestionSupplier
from story_doctor.core.schemas_assessment import utc_now
from story_doctor.db.store import Store, run_cache_sweeper

logger = get_logger(__name__)


def configure_state(app: FastAPI, settings: Settings) -> None:
    """Attach the per-process store and generators to ``app.state``."""
    store = Store.from_settings(settings)
    question_generator = build_text_generator(settings, settings.QUESTION_TEMPERATURE)

    app.state.store = store
    app.state.question_supplier = QuestionSupplier(
        store,
        question_generator,
        timeout_seconds=settings.llm_timeout_seconds,
        question_count=settings.QUESTIONS_PER_SET,
    )
    app.state.interpretation_generator = build_text_generator(
        settings, settings.INTERPRETATION_TEMPERATURE
    )

    if not settings.llm_configured:
        logger.warning("OPENAI_API_KEY not set; question requests will use fallback sets")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    sweeper = asyncio.create_task(
        run_cache_sweeper(app.state.store.cache, settings.CACHE_SWEEP_INTERVAL_SECONDS)
    )
    try:
        yield
    finally:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        logger.info("Cache sweeper stopped")


settings = get_settings()

app = FastAPI(
    title="Story Doctor",
    description="Reader/work suitability assessment service",
    version=__version__,
    lifespan=lifespan,
)

configure_state(app, settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(
        content={"status": "ok", "timestamp": utc_now().isoformat()},
        status_code=200,
    )


app.include_router(api_router, prefix="/api")
