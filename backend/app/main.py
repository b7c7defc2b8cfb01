"""Main FastAPI application."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.api import api_router
from app.config import settings
from app import __version__
from app.exceptions import AppError

# Custom TRACE level
logging.TRACE = 5
logging.addLevelName(logging.TRACE, "TRACE")

# Add trace method to standard Logger class for all instances
def trace_method(self, msg, *args, **kwargs):
    if self.isEnabledFor(logging.TRACE):
        self._log(logging.TRACE, msg, args, **kwargs)

logging.Logger.trace = trace_method

# Configure root logger early
log_level_str = settings.log_level.upper()
log_level = logging.TRACE if log_level_str == "TRACE" else getattr(logging, log_level_str, logging.INFO)
if not logging.getLogger().hasHandlers():
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)-8s - %(message)s'
    )

    root = logging.getLogger()

    # VERBOSE turns on SQL statement logging on top of DEBUG
    if log_level_str == "VERBOSE":
        root_level = logging.DEBUG
        sqlalchemy_level = logging.INFO
        services_level = logging.DEBUG
        root.info("VERBOSE mode enabled: SQL statements and service details active for debugging.")
    elif log_level_str == "TRACE":
        root_level = logging.TRACE
        sqlalchemy_level = logging.DEBUG
        services_level = logging.TRACE
    else:
        root_level = log_level
        sqlalchemy_level = logging.WARNING
        services_level = root_level

    root.setLevel(root_level)
    logging.getLogger("sqlalchemy.engine").setLevel(sqlalchemy_level)
    logging.getLogger("passlib").setLevel(logging.WARNING if root_level > logging.DEBUG else root_level)
    logging.getLogger("app.services").setLevel(services_level)

    root.trace("Trace logging enabled at startup (verbose details).") if log_level_str == "TRACE" else root.debug("Debug logging enabled at startup.")

log = logging.getLogger(__name__)

app = FastAPI(
    title="Account Signup Service",
    description="User registration and session management",
    version=__version__,
    docs_url=f"{settings.api_prefix}/docs",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        log.error(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    log.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"title": "Server Error", "message": "Internal server error", "errors": {}}
    )


@app.get(f"{settings.api_prefix}/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__
    }

@app.get("/")
async def root():
    """Root endpoint - points to the docs."""
    return {
        "message": "Account Signup Service API",
        "version": __version__,
        "docs": f"{settings.api_prefix}/docs"
    }

app.include_router(api_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn_level = "debug" if log_level_str == "VERBOSE" else settings.log_level.lower()
    uvicorn.run(app, host="0.0.0.0", port=8000, log_level=uvicorn_level)
