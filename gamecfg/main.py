"""Main FastAPI application"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api import games, system, tags, upload
from .api import settings as settings_api
from .config import settings
from .database import engine, init_db
from .services.log_service import log_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    await init_db()
    log_service.info("Database initialized")
    try:
        yield
    except asyncio.CancelledError:
        pass  # Suppress CancelledError during shutdown
    finally:
        await engine.dispose()


app = FastAPI(
    title="GameCfg",
    description="Per-game configuration file manager",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
# If ALLOWED_ORIGINS is not set, default to ["*"]
allowed_origins = ["*"]
allow_credentials = False  # Credentials cannot be used with "*"

if settings.ALLOWED_ORIGINS:
    allowed_origins = settings.ALLOWED_ORIGINS.split(",")
    allow_credentials = True

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded icons are served as /uploads/<file>
app.mount(
    settings.UPLOADS_URL_PREFIX,
    StaticFiles(directory=str(settings.UPLOADS_DIR)),
    name="uploads",
)

app.include_router(games.router)
app.include_router(settings_api.router)
app.include_router(tags.router)
app.include_router(upload.router)
app.include_router(system.router)


@app.get("/")
async def api_root():
    """API root"""
    return {"name": "GameCfg API", "version": __version__, "docs": "/docs"}


# Every error body is {"error": "<message>"}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return JSONResponse(
        status_code=400, content={"error": "; ".join(messages) or "Invalid request"}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log_service.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
