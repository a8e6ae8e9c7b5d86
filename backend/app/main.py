# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.db import init_db, close_db
from app.core.exceptions import (
    CourseReferenceError,
    DirectoryError,
    EmailAlreadyExists,
    InvalidRole,
    InvalidStatus,
    UserNotFound,
)
from app.api.v1.routers import auth, users

from app.core.bootstrap import ensure_default_admin
logger = logging.getLogger("uvicorn.error")

# Domain error -> HTTP status
ERROR_STATUS = {
    UserNotFound: 404,
    EmailAlreadyExists: 409,
    CourseReferenceError: 400,
    InvalidStatus: 422,
    InvalidRole: 422,
}

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(DirectoryError)
async def directory_error_handler(request: Request, exc: DirectoryError):
    """Render directory errors in the same {"detail": {"code", "message"}} shape as HTTPException."""
    detail = {"code": exc.code, "message": str(exc)}
    if isinstance(exc, CourseReferenceError):
        detail["missing"] = exc.missing
    return JSONResponse(status_code=ERROR_STATUS.get(type(exc), 400), content={"detail": detail})

@app.on_event("startup")
async def on_startup():
    await init_db()
    # Ensure there's a default admin account on first run
    await ensure_default_admin()
    logger.info("[startup] %s ready (env=%s)", settings.APP_NAME, settings.env)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}
