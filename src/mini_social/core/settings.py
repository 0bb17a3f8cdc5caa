"""Application settings and configuration.

This module defines all configuration options for the Mini Social backend.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a `.env` file.
    """

    # Application metadata
    app_name: str = Field(default="Mini Social", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    port: int = Field(default=5000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(validation_alias=AliasChoices("SECRET_KEY", "JWT_SECRET"))
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./mini_social.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")
    database_timeout_seconds: float = Field(default=10.0, alias="DATABASE_TIMEOUT_SECONDS")

    # Image host (imgbb) integration
    imgbb_api_key: str | None = Field(default=None, alias="IMGBB_API_KEY")
    imgbb_upload_url: str = Field(
        default="https://api.imgbb.com/1/upload",
        alias="IMGBB_UPLOAD_URL",
    )
    image_upload_timeout_seconds: float = Field(
        default=15.0,
        alias="IMAGE_UPLOAD_TIMEOUT_SECONDS",
    )
    image_upload_max_retries: int = Field(default=2, alias="IMAGE_UPLOAD_MAX_RETRIES")
    image_upload_retry_backoff_seconds: float = Field(
        default=0.5,
        alias="IMAGE_UPLOAD_RETRY_BACKOFF_SECONDS",
    )
    max_image_base64_length: int = Field(
        default=10 * 1024 * 1024,
        alias="MAX_IMAGE_BASE64_LENGTH",
    )

    # Rate limiting (fixed window per client address)
    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit_requests: int = Field(default=100, alias="RATE_LIMIT_REQUESTS")
    rate_limit_window_seconds: int = Field(default=15 * 60, alias="RATE_LIMIT_WINDOW_SECONDS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def image_upload_enabled(self) -> bool:
        """Return True when an image host API key is configured."""
        return bool(self.imgbb_api_key)


settings = Settings()  # type: ignore[call-arg]
