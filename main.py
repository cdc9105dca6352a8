import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database import check_connection, get_session_context, init_db
from dependencies import hash_password
from models import User, UserRole, UserStatus
from routers import (
    admin_router,
    client_router,
    auth_router,
    expenses_router,
    payments_router,
    rooms_router,
    tenants_router,
    users_router,
)
from services.errors import BoardingHouseError, ServerError

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def ensure_admin():
    """Seed the bootstrap admin account from ADMIN_EMAIL / ADMIN_PASSWORD."""
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return
    email = settings.ADMIN_EMAIL.strip().lower()
    with get_session_context() as db:
        if db.query(User.id).filter(User.email == email).first():
            return
        db.add(User(
            name=settings.ADMIN_NAME,
            email=email,
            password=hash_password(settings.ADMIN_PASSWORD),
            role=UserRole.ADMIN.value,
            status=UserStatus.ACTIVE.value,
        ))
    logger.info("Bootstrap admin %s created", email)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not check_connection():
        logger.warning("Database is not reachable at startup")
    if settings.AUTO_CREATE_TABLES:
        init_db()
    ensure_admin()
    yield


# App instance
app = FastAPI(title="Boarding House API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static uploads (payment receipts)
UPLOAD_DIR = settings.UPLOAD_DIR
os.makedirs(UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR), name="uploads")


# Error translation
@app.exception_handler(BoardingHouseError)
async def domain_error_handler(request: Request, exc: BoardingHouseError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message, **exc.extra},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid input")
    else:
        message = "Invalid input"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if exc.status_code != 404 or exc.detail != "Not Found" else "Route not found"
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": message})


# Unhandled errors (database failures included) become a plain 500
@app.middleware("http")
async def server_error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = ServerError()
        return JSONResponse(status_code=error.status_code, content={"success": False, "message": error.message})


app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(client_router)
app.include_router(rooms_router)
app.include_router(tenants_router)
app.include_router(payments_router)
app.include_router(expenses_router)
app.include_router(users_router)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=True)
