from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.utils.logging_config import setup_logging
from app.utils.logger import get_logger
from app.middleware.logging_middleware import log_requests
from app.exceptions import MatchmakingException
from app.config import get_settings

# Setup logging configuration
setup_logging()
# Get logger instance
logger = get_logger(__name__)
settings = get_settings()

app = FastAPI(
    title="Matchmaking API",
    description="""
    Compatibility scoring and match generation for a membership-based
    matchmaking service.

    - **Compatibility**: weighted 0-100 score between two applicants with a
      per-question breakdown and dealbreaker violations
    - **Recommendations**: ranked partners for an applicant
    - **Admin**: match analysis and curated event match generation
    """,
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.cors_config["allow_credentials"],
    allow_methods=settings.cors_config["allow_methods"],
    allow_headers=settings.cors_config["allow_headers"],
    expose_headers=settings.cors_config["expose_headers"],
    max_age=settings.cors_config["max_age"]
)

@app.exception_handler(MatchmakingException)
async def matchmaking_exception_handler(request: Request, exc: MatchmakingException):
    """Render application errors as {"error": {"code", "message"}}."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.code, "message": exc.message}}
    )

def load_routers():
    """Load routers, honouring the admin routes toggle."""
    from app.routers import compatibility, health

    routers = [
        ("compatibility", compatibility.router),
        ("health", health.router)
    ]

    if settings.ENABLE_ADMIN_ROUTES:
        from app.routers import admin
        routers.append(("admin", admin.router))
        logger.info("Admin routes enabled")
    else:
        logger.info("Admin routes disabled (ENABLE_ADMIN_ROUTES=false)")

    for router_name, router in routers:
        app.include_router(router)
        logger.info(f"Loaded {router_name} router")

load_routers()

@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)

@app.on_event("startup")
async def startup_event():
    """Create tables and report configuration problems on startup."""
    from app.database.connection import init_db, check_db_connection

    init_db()
    if not check_db_connection():
        raise RuntimeError("Database connection failed")

    for issue in settings.validate_configuration():
        logger.warning(f"Configuration issue: {issue}")

@app.get("/")
async def root():
    return {
        "message": "Matchmaking API",
        "version": "1.0.0",
        "docs": "/docs"
    }
