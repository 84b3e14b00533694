"""FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from flourish.config import settings
from flourish.database import Base, engine
from flourish.exceptions import ExportTargetUnavailableError, InvalidEventDataError

# Import routers
from flourish.routers import users, events, providers, bookings, memories, calendar

# Import all models so Base.metadata knows about them
from flourish.models.user import User                                        # noqa: F401
from flourish.models.event import Event                                      # noqa: F401
from flourish.models.service import ServiceProvider, EventServiceBooking     # noqa: F401
from flourish.models.memory import EventMemory, EventComment                 # noqa: F401
from flourish.models.calendar_entry import UserCalendarEvent                 # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="FlourishTalents Events",
    description="Events, service bookings, memories and calendar export for the FlourishTalents marketplace",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(providers.router, prefix="/api/providers", tags=["ServiceProviders"])
app.include_router(bookings.router, prefix="/api", tags=["Bookings"])
app.include_router(memories.router, prefix="/api", tags=["Memories"])
app.include_router(calendar.router, prefix="/api/calendar", tags=["Calendar"])


@app.exception_handler(InvalidEventDataError)
def invalid_event_data_handler(request: Request, exc: InvalidEventDataError):
    logger.warning("Invalid event data on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ExportTargetUnavailableError)
def export_target_unavailable_handler(request: Request, exc: ExportTargetUnavailableError):
    logger.warning("Export failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
