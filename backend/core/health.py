"""
Health check module for the application.
"""
import time
from typing import Dict, Any
from sqlalchemy import text

from core.logging_config import get_logger
from database.session import AsyncSessionLocal

logger = get_logger("app.health")

async def check_database_connection() -> Dict[str, Any]:
    """
    Check if the database connection is healthy

    Returns:
        Dict with status and connection details
    """
    start_time = time.time()
    result = {
        "component": "database",
        "status": "unknown",
        "response_time_ms": 0,
        "details": {}
    }

    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))

            pool = session.bind.pool if session.bind is not None else None
            if pool is not None and hasattr(pool, "size"):
                result["details"]["pool_size"] = pool.size()
                result["details"]["pool_checked_out"] = pool.checkedout()

        result["status"] = "healthy"
    except Exception as e:
        result["status"] = "unhealthy"
        result["details"]["error"] = str(e)
        logger.error(f"Database health check failed: {str(e)}", exc_info=True)

    result["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
    return result
