"""Application-wide configuration settings."""

from enum import Enum
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv(override=True)

# Base paths
BASE_DIR = Path(__file__).parent
LOGS_DIR = BASE_DIR / "logs"


class PROVIDER_TYPE(Enum):
    GOOGLE = "google"
    GROQ = "groq"


class APISettings(BaseSettings):
    """API-related settings."""

    environment: str = Field(default="development", validation_alias="ENVIRONMENT")
    frontend_url: str = Field(default="http://localhost:3000", validation_alias="FRONTEND_URL")
    cors_origins: List[str] = Field(default=["http://localhost:3000"])

    model_config = SettingsConfigDict(env_file=".env", extra="allow")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        """CORS origins including the configured frontend."""
        origins = list(self.cors_origins)
        if self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins


class DatabaseSettings(BaseSettings):
    """Database-related settings."""

    mongodb_uri: str = Field(default="mongodb://localhost:27017", validation_alias="MONGODB_URI")
    database_name: str = Field(default="skillpath", validation_alias="DATABASE_NAME")

    @property
    def uri(self) -> str:
        """Get the MongoDB connection URI."""
        return self.mongodb_uri

    model_config = SettingsConfigDict(env_file=".env", extra="allow")


class AISettings(BaseSettings):
    """AI-related settings."""

    google_api_key: SecretStr = Field(default=SecretStr(""), validation_alias="GEMINI_API_KEY")
    groq_api_key: SecretStr = Field(default=SecretStr(""), validation_alias="GROQ_API_KEY")
    default_provider: PROVIDER_TYPE = Field(default=PROVIDER_TYPE.GOOGLE, validation_alias="AI_PROVIDER")
    default_model: str = Field(default="gemini-2.0-flash", validation_alias="AI_DEFAULT_MODEL")
    groq_model: str = Field(default="llama-3.3-70b-versatile", validation_alias="GROQ_MODEL")

    # Failed generations are terminal for the request unless this is raised
    max_retries: int = Field(default=0, validation_alias="AI_MAX_RETRIES")

    model_config = SettingsConfigDict(env_file=".env", extra="allow")


class ContentSettings(BaseSettings):
    """External article feed settings."""

    request_timeout: float = Field(default=10.0, validation_alias="CONTENT_REQUEST_TIMEOUT")
    feed_limit: int = Field(default=6)
    default_feed_limit: int = Field(default=8)
    devto_base_url: str = Field(default="https://dev.to/api")
    rss2json_url: str = Field(default="https://api.rss2json.com/v1/api.json")

    model_config = SettingsConfigDict(env_file=".env", extra="allow")


class AuthSettings(BaseSettings):
    """Authentication-related settings."""

    secret_key: SecretStr = Field(default=SecretStr("change-me"), validation_alias="AUTH_SECRET_KEY")
    token_lifetime_seconds: int = Field(default=3600, validation_alias="AUTH_TOKEN_LIFETIME")
    google_client_id: str = Field(default="", validation_alias="GOOGLE_CLIENT_ID")
    google_client_secret: SecretStr = Field(default=SecretStr(""), validation_alias="GOOGLE_CLIENT_SECRET")

    model_config = SettingsConfigDict(env_file=".env", extra="allow")


class LoggingSettings(BaseSettings):
    """Logging-related settings."""

    log_level: str = Field(default="INFO")
    file_log_level: str = Field(default="DEBUG")
    backup_count: int = Field(default=9)
    format: str = Field(default="%(name)s - %(levelname)s - %(message)s")
    file_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    enable_endpoint_logging: bool = Field(default=False, validation_alias="ENABLE_ENDPOINT_LOGGING")
    log_to_file: bool = Field(default=True, validation_alias="LOG_TO_FILE")
    noisy_loggers: Dict[str, str] = Field(
        default={
            "urllib3": "WARNING",
            "uvicorn": "WARNING",
            "httpx": "WARNING",
            "httpcore": "WARNING",
            "pymongo": "WARNING",
            "pymongo.topology": "WARNING",
            "pymongo.server": "WARNING",
            "pymongo.connection": "WARNING",
            "pymongo.monitoring": "WARNING",
            "watchfiles": "WARNING",
            "watchfiles.main": "WARNING",
            "grpc": "WARNING",
        }
    )

    model_config = SettingsConfigDict(env_file=".env", extra="allow")


class Settings(BaseSettings):
    """Global settings container."""

    api: APISettings = Field(default_factory=APISettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    ai: AISettings = Field(default_factory=AISettings)
    content: ContentSettings = Field(default_factory=ContentSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(env_file=".env", extra="allow")


# Create global settings instance
settings = Settings()
