# File: eventdesk/main.py
import logging
import time
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Callable

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventdesk.api.deps import get_environment
from eventdesk.api.v1.api import api_router
from eventdesk.core.config import settings
from eventdesk.core.environments import EnvironmentConfig, load_environment
from eventdesk.db.database import Base, SessionLocal, engine

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Resolved once; handlers read it through deps.get_environment
environment = load_environment(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 Starting {settings.PROJECT_NAME}")
    logger.info(f"   🌍 Environment: {environment.name.value}")
    logger.info(f"   🗄️ Data source: {environment.data_source.value}")
    logger.info(f"   🔗 API prefix: {settings.API_V1_STR}")

    if settings.AUTO_CREATE_TABLES:
        import eventdesk.models  # noqa: F401  registers tables on Base.metadata

        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables ensured")

    yield

    logger.info(f"🛑 Shutting down {settings.PROJECT_NAME}")


app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)
app.state.environment = environment

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"],
    allow_headers=["*"],
    expose_headers=["X-Process-Time", "Content-Disposition"],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next: Callable) -> Response:
    """Log all requests with timing"""
    start_time = time.time()
    origin = request.headers.get("origin", "No Origin")

    logger.info(f"🌐 {request.method} {request.url.path} (origin: {origin})")

    try:
        response = await call_next(request)
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"❌ {request.method} {request.url.path} - "
            f"Error: {str(e)} - "
            f"Time: {process_time:.4f}s"
        )
        logger.exception("Full error traceback:")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "Something went wrong, please try again",
                "status_code": 500,
            },
        )

    process_time = time.time() - start_time
    logger.info(
        f"✅ {request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    try:
        reason = HTTPStatus(exc.status_code).phrase
    except ValueError:
        reason = "Error"
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": reason,
            "message": exc.detail,
            "status_code": exc.status_code,
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    message = str(first.get("msg", "Invalid request"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if field:
        message = f"{field}: {message}"

    logger.info(f"⚠️ Validation failed for {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=422,
        content={
            "message": message,
            "errors": [
                {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg"), "type": error.get("type")}
                for error in errors
            ],
        },
    )


# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
def root(env: EnvironmentConfig = Depends(get_environment)):
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "environment": env.name.value,
        "data_source": env.data_source.value,
        "docs": "/docs",
    }


@app.get("/health")
def health_check(env: EnvironmentConfig = Depends(get_environment)):
    """Health check with database connectivity"""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.error(f"💥 Health check database error: {str(e)}")
        database = "unavailable"
    finally:
        db.close()

    healthy = database == "connected"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "database": database,
            "environment": env.name.value,
            "data_source": env.data_source.value,
        },
    )
