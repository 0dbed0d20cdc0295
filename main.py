from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from stream_attendance.api.routes import admin, attendance, auth, config, stream
from stream_attendance.core.config import settings
from stream_attendance.core.logging_config import setup_logging
from stream_attendance.core.logging_middleware import LoggingMiddleware
from stream_attendance.core.session_store import session_store
from stream_attendance.db.init_db import init_db

logger = logging.getLogger("stream_attendance.main")


def log_auth_event(event, identity):
    who = identity.email if identity else "anonymous"
    logger.info(f"Auth state changed: {event.value} ({who})")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    dispose = session_store.on_auth_state_change(log_auth_event)
    try:
        yield
    finally:
        dispose()


app = FastAPI(title=f"{settings.CHURCH_NAME} Live Stream Attendance", lifespan=lifespan)

app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)


@app.get("/")
async def root():
    return {"message": f"Welcome to the {settings.CHURCH_NAME} live stream API"}

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
app.include_router(stream.router, prefix="/stream", tags=["Stream"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])
app.include_router(config.router, prefix="/config", tags=["Config"])
