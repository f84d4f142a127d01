from datetime import timedelta
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
import logging
import pytz
from app.routers import payments, alerts, session
from app.core.config import settings as app_settings
from app.core.http import create_api_client
from app.core.security import create_session_token, decode_session_token
from app.services.sessions import SessionRegistry

# Configure logging
logging.basicConfig(
    level=app_settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

timezone = pytz.timezone(app_settings.TIMEZONE)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting Student Payments Admin against {app_settings.API_BASE_URL}...")

    client = getattr(app.state, "api_client", None) or create_api_client(app_settings)
    app.state.api_client = client
    app.state.sessions = SessionRegistry(client, timedelta(minutes=app_settings.SESSION_IDLE_MINUTES))

    scheduler = AsyncIOScheduler(timezone=timezone)
    app.state.scheduler = scheduler

    if app_settings.SESSION_SWEEP_ENABLED:
        scheduler.add_job(
            app.state.sessions.sweep,
            trigger=IntervalTrigger(minutes=app_settings.SESSION_SWEEP_MINUTES, timezone=timezone),
            id="session_sweep",
            name="Idle Session Sweep",
            replace_existing=True,
        )
        scheduler.start()
        logger.info(
            f"Session sweeper started - idle sessions closed after {app_settings.SESSION_IDLE_MINUTES} minutes"
        )
    else:
        logger.info("Session sweeper is disabled in configuration")

    yield

    # Shutdown
    logger.info("Shutting down Student Payments Admin...")
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Session sweeper stopped")

    app.state.sessions.close_all()
    await client.aclose()
    app.state.api_client = None


app = FastAPI(
    title="Student Payments Admin",
    description="Administrative screen for student tuition payments and payment alerts",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def session_middleware(request: Request, call_next):
    """Attach the caller's SessionContext, opening a new one when the cookie is missing or stale."""
    if request.url.path == "/health":
        return await call_next(request)

    registry: SessionRegistry = request.app.state.sessions
    token = request.cookies.get(app_settings.SESSION_COOKIE_NAME)
    context = registry.get(decode_session_token(token)) if token else None

    if context is None:
        context = registry.create()
    request.state.session = context

    response = await call_next(request)

    # sliding expiry: every response for a live session carries a fresh token
    if context.session_id in registry:
        response.set_cookie(
            app_settings.SESSION_COOKIE_NAME,
            create_session_token(context.session_id),
            max_age=app_settings.SESSION_IDLE_MINUTES * 60,
            httponly=True,
            samesite="lax",
        )
    return response


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint with session sweeper status"""
    scheduler = request.app.state.scheduler
    next_sweep = None

    if scheduler.running:
        job = scheduler.get_job("session_sweep")
        if job and job.next_run_time:
            next_sweep = job.next_run_time.isoformat()

    return {
        "status": "ok",
        "service": "student-payments-admin",
        "api_base_url": app_settings.API_BASE_URL,
        "active_sessions": len(request.app.state.sessions),
        "sweeper": "running" if scheduler.running else "stopped",
        "next_sweep": next_sweep,
        "timezone": app_settings.TIMEZONE,
    }


app.include_router(payments.router)
app.include_router(alerts.router)
app.include_router(session.router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8008, reload=True)
