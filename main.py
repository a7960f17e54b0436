import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import JoblyError
from app.core.logging_config import setup_logging
from app.core.validation import format_errors
from app.middleware.authentication import AuthenticationMiddleware
from app.api.endpoints import auth, companies, health, jobs, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
    logger.info("Starting up Jobly API...")
    init_db()

    yield

    # Shutdown
    logger.info("Shutting down Jobly API...")


def error_response(message, status_code: int) -> JSONResponse:
    """Every error body is {"error": {"message": ..., "status": ...}}."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map errors to HTTP responses.

    JoblyError               → its own status (400/401/404)
    RequestValidationError   → 400 with one message per violation
    Starlette HTTPException  → its status (unknown route, wrong method)
    Exception                → 500, details only in the server log
    """

    @app.exception_handler(JoblyError)
    async def handle_jobly_error(request: Request, exc: JoblyError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return error_response(format_errors(exc.errors()), 400)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(exc.detail, exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(f"Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return error_response("Internal Server Error", 500)


def create_app() -> FastAPI:
    """Build the application: middleware, error handlers and routers."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Job board API: companies, jobs and users",
        lifespan=lifespan
    )

    # Resolve the caller's identity on every request
    app.add_middleware(AuthenticationMiddleware, secret_key=settings.SECRET_KEY)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router)
    app.include_router(companies.router)
    app.include_router(jobs.router)
    app.include_router(users.router)
    app.include_router(health.router)

    @app.get("/")
    def root():
        """Root endpoint - API health check"""
        return {
            "message": "Jobly API",
            "version": "1.0.0",
            "status": "healthy"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
