from __future__ import annotations
import asyncio
import uuid
from contextlib import asynccontextmanager, suppress
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from commissiestrijd.config import settings
from commissiestrijd.db import SessionLocal
from commissiestrijd.errors import DomainError
from commissiestrijd.jobs.image_cleanup import ImageRetentionSweeper
from commissiestrijd.logging_setup import configure_logging
from commissiestrijd.services.clock import Clock
from commissiestrijd.services.identity import IdentityProvider
from commissiestrijd.services.storage import build_image_store
from commissiestrijd.routes.system import router as system_router
from commissiestrijd.routes.submitted_tasks import router as submitted_tasks_router
from commissiestrijd.routes.possible_tasks import router as possible_tasks_router
from commissiestrijd.routes.committees import router as committees_router
from commissiestrijd.routes.periods import router as periods_router
from commissiestrijd.routes.leaderboard import router as leaderboard_router
from commissiestrijd.routes.images import router as images_router
import structlog

configure_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    log.info("startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha)
    app.state.clock = Clock(settings.timezone)
    app.state.image_store = build_image_store(settings)

    # Fails loudly: no requests are served without a known userinfo endpoint
    identity = IdentityProvider(settings.oauth_provider_url)
    await identity.discover()
    app.state.identity = identity

    stop = asyncio.Event()
    sweeper_task = None
    if settings.sweeper_enabled:
        sweeper = ImageRetentionSweeper(
            SessionLocal, app.state.image_store, app.state.clock, retention_years=settings.retention_years
        )
        sweeper_task = asyncio.create_task(sweeper.run(stop), name="image-retention-sweeper")
    yield
    # Shutdown
    stop.set()
    if sweeper_task is not None:
        sweeper_task.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper_task
    await identity.aclose()
    log.info("shutdown")

app = FastAPI(
    title=f"{settings.app_display_name} API",
    version=settings.app_version,
    lifespan=lifespan,
    description=f"{settings.app_display_name} API for committee task submissions and the leaderboard",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(system_router)
app.include_router(submitted_tasks_router)
app.include_router(possible_tasks_router)
app.include_router(committees_router)
app.include_router(periods_router)
app.include_router(leaderboard_router)
app.include_router(images_router)

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    log.warning("request_rejected", error=type(exc).__name__, detail=exc.message, path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    try:
        response: Response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()
    response.headers["X-Request-ID"] = rid
    return response
