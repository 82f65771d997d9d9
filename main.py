import logging
import subprocess
import sys
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

import click
import uvicorn
from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from forum.core.config import settings
from forum.core.database import Base, SessionLocal, engine
from forum.core.decorator import DBException
from forum.core.exceptions import ForumException
from forum.core.init import initialize_application
from forum.core.limiter import custom_rate_limit_exceeded_handler, limiter
from forum.models import *
from forum.routers import routes

BASE_DIR = Path(__file__).parent


# ============================================================================
# Logging Configuration
# ============================================================================
def resolve_log_level(debug: bool, log_level: str) -> int:
    """Debug mode always logs at DEBUG; otherwise the configured level applies."""
    if debug:
        return logging.DEBUG
    return logging.getLevelName(log_level.upper())


def setup_logging():
    log_file = BASE_DIR / settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=resolve_log_level(settings.debug, settings.log_level),
        format="%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, mode="a", encoding="utf-8"),
        ],
        force=True,
    )

    # Suppress verbose third-party logs
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return logging.getLogger(__name__)


logger = setup_logging()


# ============================================================================
# Application Lifespan
# ============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting forum service...")

    try:
        Base.metadata.create_all(bind=engine)

        db = SessionLocal()
        try:
            initialize_application(db)
        finally:
            db.close()

        logger.info(
            f"✓ Forum service ready "
            f"(report auto-hide threshold: {settings.report_auto_hide_threshold})"
        )
    except Exception as e:
        logger.error(f"✗ Failed during startup: {e}", exc_info=True)
        raise

    yield

    logger.info("✓ Forum service stopped")


# ============================================================================
# FastAPI Application
# ============================================================================
app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    debug=settings.debug,
    lifespan=lifespan,
)

app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_headers(request: Request, call_next):
    """Echo or assign X-Request-ID and report the handling time."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    start_time = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Process-Time"] = f"{time.perf_counter() - start_time:.4f}"
    response.headers["X-Request-ID"] = request_id
    return response


# ============================================================================
# Exception Handlers
# ============================================================================
@app.exception_handler(ForumException)
async def forum_exception_handler(request: Request, exc: ForumException):
    if exc.status_code == 409:
        logger.warning(f"Conflict on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_type} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "type": exc.error_type},
    )


@app.exception_handler(DBException)
async def db_exception_handler(request: Request, exc: DBException):
    logger.error(f"Database exception on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "type": "database_error"},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Malformed request on {request.url.path}: {exc.errors()}")
    details = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={
            "error": "Malformed request",
            "type": "request_validation_error",
            "details": details,
        },
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"SQLAlchemy error: {type(exc).__name__}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Database error occurred", "type": "database_error"},
    )


app.add_exception_handler(RateLimitExceeded, custom_rate_limit_exceeded_handler)


@app.get("/health")
@limiter.limit("10/minute")
async def health_check(request: Request):
    """Database reachability and the active moderation policy."""
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "database": db_status,
        "report_auto_hide_threshold": settings.report_auto_hide_threshold,
    }


for router in routes:
    app.include_router(router)


# ============================================================================
# CLI Commands
# ============================================================================
@click.group()
def cli():
    """Forum service management CLI."""
    pass


def run_migrations():
    alembic_cfg = Config(str(BASE_DIR / "alembic.ini"))
    command.upgrade(alembic_cfg, "head")
    logger.info("✓ Migrations applied")


def gunicorn_command(host: str, port: int, workers: int):
    return [
        "gunicorn",
        "main:app",
        "--worker-class",
        "uvicorn.workers.UvicornWorker",
        "--workers",
        str(workers),
        "--bind",
        f"{host}:{port}",
        "--access-logfile",
        "-",
        "--log-level",
        settings.log_level,
    ]


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind the server to")
@click.option("--port", default=8000, help="Port to run the server on")
@click.option("--reload", is_flag=True, help="Enable auto-reload (development only)")
def dev(host: str, port: int, reload: bool):
    """Run development server with Uvicorn."""
    logger.info(f"Starting development server on {host}:{port} (reload={reload})")
    uvicorn.run("main:app", host=host, port=port, reload=reload, log_level="debug")


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind the server to")
@click.option("--port", default=8000, help="Port to run the server on")
@click.option("--workers", default=4, help="Number of worker processes")
def prod(host: str, port: int, workers: int):
    """Apply migrations, then run the production server with Gunicorn."""
    run_migrations()

    logger.info(f"Starting Gunicorn on {host}:{port} with {workers} workers")
    try:
        subprocess.run(gunicorn_command(host, port, workers), check=True)
    except subprocess.CalledProcessError as e:
        raise click.ClickException(f"Gunicorn exited with status {e.returncode}")
    except FileNotFoundError:
        raise click.ClickException("Gunicorn not installed")


@cli.command()
def info():
    """Display application information."""
    click.echo(f"Application: {settings.app_name} {settings.app_version}")
    click.echo(f"Debug Mode: {settings.debug}")
    click.echo(f"Log Level: {settings.log_level}")
    click.echo(f"Report auto-hide threshold: {settings.report_auto_hide_threshold}")
    click.echo(f"Report rate limit: {settings.report_rate_limit}")


if __name__ == "__main__":
    cli()
