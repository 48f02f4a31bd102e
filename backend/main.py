from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Project imports
from api.v1.api import api_router
from core.config import settings
from database.init_db import init_db
from core.logging_config import configure_logging
from core.middleware.logging_middleware import RequestLoggingMiddleware
from core.exceptions import setup_exception_handlers
from core.health import check_database_connection

# Configure logging using our enhanced logging configuration
logger = configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Event management API: events CRUD with filters and JWT authentication",
    version="0.1.0"
)

# Setup global exception handlers
setup_exception_handlers(app)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Configure CORS for the web client origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    """Event that runs when the application starts."""
    logger.info("Starting application...")
    try:
        await init_db()
        logger.info("Database initialized correctly")
    except Exception as e:
        logger.error(f"Error initializing database: {e}", exc_info=True)
        raise

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
async def root():
    return {"message": settings.PROJECT_NAME}

@app.get("/health")
async def health_check():
    """Simple health check endpoint for monitoring systems"""
    return {"status": "ok"}

@app.get("/health/database")
async def db_health_check():
    """Database-specific health check"""
    return await check_database_connection()
