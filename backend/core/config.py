from pydantic import Field, PostgresDsn, field_validator, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Any, List, Union, ClassVar
import secrets
import os
import re
import logging

# Setup logger EARLY for use during settings initialization
logger = logging.getLogger(__name__)
if not logger.hasHandlers():
    logging.basicConfig(level=logging.INFO)

# --- Helper function to get project root and backend root ---
def get_project_root() -> str:
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

PROJECT_ROOT = get_project_root()
BACKEND_ROOT = os.path.join(PROJECT_ROOT, "backend")


class Settings(BaseSettings):
    # API configuration
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "EventBoard API"

    # Pydantic-settings loads from the env file and environment variables.
    # Defaults to .env.local, overrideable via ENV_FILE
    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env.local"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Security
    SECRET_KEY: str = os.environ.get("SECRET_KEY", secrets.token_urlsafe(32))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    JWT_ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = int(os.environ.get("BCRYPT_ROUNDS", 10))

    # Environment
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")

    # Database
    POSTGRES_USER: str = os.environ.get("POSTGRES_USER", "eventboard")
    POSTGRES_PASSWORD: str = os.environ.get("POSTGRES_PASSWORD", "eventboard")
    POSTGRES_HOST: str = os.environ.get("POSTGRES_HOST", "localhost")
    POSTGRES_DB: str = os.environ.get("POSTGRES_DB", "event_board")
    DATABASE_URL: Optional[Union[PostgresDsn, str]] = Field(default=None, validate_default=True)
    DB_ECHO_LOG: bool = os.environ.get("DB_ECHO_LOG", "false").lower() == "true"

    # CORS - Default to empty list, populated based on environment later
    BACKEND_CORS_ORIGINS: List[str] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        elif v is None:
            return []
        raise ValueError(f"Invalid format for BACKEND_CORS_ORIGINS: {v}")

    # Logging
    _default_local_log_path: ClassVar[str] = os.path.join(BACKEND_ROOT, "logs")
    # Use env var for Docker override, default to calculated local path
    LOG_DIR: str = os.environ.get("CONTAINER_LOG_DIR", _default_local_log_path)

    # --- Custom Validators ---

    @field_validator("ENVIRONMENT")
    def check_environment(cls, v):
        environment = v.lower()
        if environment not in ["development", "production", "test"]:
            raise ValueError(f"Unsupported ENVIRONMENT: '{v}'. Must be 'development', 'production' or 'test'.")
        return environment

    @field_validator("BCRYPT_ROUNDS")
    def check_bcrypt_rounds(cls, v):
        # bcrypt accepts cost factors between 4 and 31
        if not 4 <= v <= 31:
            raise ValueError(f"BCRYPT_ROUNDS must be between 4 and 31, got {v}")
        return v

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_connection(cls, v: Optional[str], info) -> Any:
        # If DATABASE_URL is explicitly set in the environment, use it
        if isinstance(v, str) and v:
            # Ensure it uses asyncpg driver if provided directly
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+asyncpg://", 1)
            return v

        # Otherwise, build it from components
        values = info.data
        if not all(k in values for k in ["POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_DB"]):
            raise ValueError("Database connection details (USER, PASSWORD, HOST, DB) must be provided via environment variables if DATABASE_URL is not set.")

        return PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=values.get("POSTGRES_USER"),
            password=values.get("POSTGRES_PASSWORD"),
            host=values.get("POSTGRES_HOST"),
            path=values.get("POSTGRES_DB"),
        )

    def get_async_database_url(self) -> str:
        """Returns the validated async database connection URL."""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL is not configured.")
        return str(self.DATABASE_URL)

    def is_sqlite(self) -> bool:
        """SQLite is used for local runs and tests; it has no connection pool options."""
        return self.get_async_database_url().startswith("sqlite")

    # Initialize and log settings after validation
    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Set default CORS origins based on environment if not provided
        if not self.BACKEND_CORS_ORIGINS:
            if self.ENVIRONMENT == "development":
                # Host shell and the federated events module
                self.BACKEND_CORS_ORIGINS = [
                    "http://localhost:4200",
                    "http://localhost:4201",
                ]
                logger.info(f"Default development CORS origins set: {self.BACKEND_CORS_ORIGINS}")
            elif self.ENVIRONMENT == "production":
                logger.warning("BACKEND_CORS_ORIGINS is not set in production environment. No origins will be allowed.")
                self.BACKEND_CORS_ORIGINS = []
            else:
                logger.info(f"No default CORS origins for environment: {self.ENVIRONMENT}")
                self.BACKEND_CORS_ORIGINS = []

        # Logging important configurations (avoid logging sensitive info directly)
        logger.info(f"Environment: {self.ENVIRONMENT}")
        logger.info(f"Debug logging for DB: {self.DB_ECHO_LOG}")
        logger.info(f"CORS Origins: {self.BACKEND_CORS_ORIGINS}")
        logger.info(f"Access tokens expire after {self.ACCESS_TOKEN_EXPIRE_MINUTES} minutes")

        if self.SECRET_KEY:
            logger.info("SECRET_KEY is set.")
        else:
            logger.error("CRITICAL: SECRET_KEY is not set!")

        # Log database URL (sanitized)
        try:
            async_url = self.get_async_database_url()
            sanitized_async_url = re.sub(r':([^:/]+)@', ':***@', async_url)
            logger.info(f"Async DB URL: {sanitized_async_url}")
        except ValueError as e:
            logger.error(f"Failed to get database URL: {e}")

# Export settings as a singleton instance
try:
    settings = Settings()
except ValidationError as e:
    logger.critical(f"CRITICAL ERROR: Failed to load application settings: {e}")
    raise e
