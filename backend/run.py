import sys
import os
import uvicorn

# Add the current directory to the PYTHONPATH
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from core.config import settings
from core.logging_config import configure_logging

# Use centralized logging configuration
logger = configure_logging()

if __name__ == "__main__":
    # Disable reload in production for better performance and stability
    reload_mode = settings.ENVIRONMENT != "production"
    port = int(os.environ.get("PORT", 3000))
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode on port {port}")
    uvicorn.run("main:app", host="::", port=port, reload=reload_mode, log_level="info")
