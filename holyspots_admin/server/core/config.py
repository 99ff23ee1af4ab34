"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class BackendConfig(BaseModel):
    """Remote table API configuration."""

    url: str = Field(description="Base URL of the backend project")
    api_key: Optional[str] = Field(default=None, description="API key sent as apikey and bearer token")
    rest_path: str = Field(default="/rest/v1", description="Path prefix of the table API")
    timeout: float = Field(default=10.0, description="Request timeout in seconds")


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(default=True, description="Allow credentials in CORS requests")
    allow_methods: list[str] = Field(default=["*"], description="Allowed HTTP methods (use * for all)")
    allow_headers: list[str] = Field(default=["*"], description="Allowed HTTP headers (use * for all)")


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address to bind to",
        alias="HOLYSPOTS_ADMIN_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Server port number",
        alias="HOLYSPOTS_ADMIN_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="HOLYSPOTS_ADMIN_LOG_LEVEL",
    )
    log_format: str = Field(default="detailed", description="Log format (simple, detailed, json)", alias="LOG_FORMAT")
    log_file_dir: str = Field(default="logs", description="Directory for the log file", alias="LOG_FILE_DIR")
    enable_file_logging: bool = Field(
        default=False, description="Also write logs to a file", alias="ENABLE_FILE_LOGGING"
    )

    # =====================================================================
    # Backend Configuration
    # =====================================================================
    backend_url: str = Field(
        default="http://localhost:54321",
        description="Base URL of the backend project",
        alias="BACKEND_URL",
    )
    backend_api_key: Optional[str] = Field(
        default=None,
        description="API key of the backend project",
        alias="BACKEND_API_KEY",
    )
    backend_rest_path: str = Field(default="/rest/v1", description="Table API path prefix", alias="BACKEND_REST_PATH")
    backend_timeout: float = Field(default=10.0, description="Backend request timeout (s)", alias="BACKEND_TIMEOUT")

    # =====================================================================
    # Database Configuration (local preference store)
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./holyspots_admin.db",
        description="Async connection URL of the local preference store",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Dashboard Defaults
    # =====================================================================
    default_language: str = Field(default="ru", description="Language used when none is chosen", alias="DEFAULT_LANGUAGE")
    default_page_size: int = Field(default=10, ge=1, le=100, description="Rows per page", alias="DEFAULT_PAGE_SIZE")

    @field_validator("default_language")
    @classmethod
    def _supported_language(cls, value: str) -> str:
        from holyspots_admin.core.catalog.columns import Language

        if value not in {language.value for language in Language}:
            raise ValueError(f"Unsupported default language: {value}")
        return value

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def backend(self) -> BackendConfig:
        """Get backend table API configuration."""
        return BackendConfig(
            url=self.backend_url,
            api_key=self.backend_api_key,
            rest_path=self.backend_rest_path,
            timeout=self.backend_timeout,
        )

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration."""
        return CORSConfig(origins=self.cors_origins, allow_credentials=self.cors_allow_credentials)


settings = Settings()
