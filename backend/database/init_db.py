import asyncio
import logging

from database.session import async_engine as engine
# Import all models to ensure SQLAlchemy registers them
from database.models import BaseModel

# Logging configuration
logger = logging.getLogger(__name__)

async def create_tables(connection) -> None:
    """Create all database tables if they don't exist"""
    logger.info("Creating database tables...")
    await connection.run_sync(BaseModel.metadata.create_all)
    logger.info("Database tables created successfully")

async def init_db():
    """Initialize the database schema"""
    logger.info("Starting database initialization...")

    async with engine.begin() as conn:
        await create_tables(conn)

    logger.info("Database initialization completed")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_db())
