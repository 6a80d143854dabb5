"""Application settings and configuration.

This module defines all configuration options for the MindWell API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ASYNC_DRIVER_SCHEMES = (
    ("sqlite+aiosqlite", "sqlite"),
    ("postgresql+asyncpg", "postgresql"),
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="MindWell API", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./mindwell.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Anonymous letters board
    letters_page_size: int = Field(default=10, alias="LETTERS_PAGE_SIZE")
    letters_store_page_size: int = Field(default=5, alias="LETTERS_STORE_PAGE_SIZE")
    letters_max_page_size: int = Field(default=50, alias="LETTERS_MAX_PAGE_SIZE")
    letter_max_length: int = Field(default=2000, alias="LETTER_MAX_LENGTH")
    reply_max_length: int = Field(default=500, alias="REPLY_MAX_LENGTH")
    atomic_like_increment: bool = Field(default=False, alias="ATOMIC_LIKE_INCREMENT")
    moderate_replies: bool = Field(default=True, alias="MODERATE_REPLIES")

    # Generative text service (moderation verdicts and the assistant)
    google_api_key: str | None = Field(default=None, alias="GOOGLE_API_KEY")
    generative_model: str = Field(default="gemini-1.5-pro-latest", alias="GENERATIVE_MODEL")
    generative_base_url: str = Field(
        default="https://generativelanguage.googleapis.com",
        alias="GENERATIVE_BASE_URL",
    )
    generative_timeout_seconds: float = Field(default=30.0, alias="GENERATIVE_TIMEOUT_SECONDS")
    moderation_timeout_seconds: float = Field(default=15.0, alias="MODERATION_TIMEOUT_SECONDS")

    # Chatbot
    chatbot_max_length: int = Field(default=1000, alias="CHATBOT_MAX_LENGTH")

    # Facility finder (Overpass)
    overpass_url: str = Field(
        default="https://overpass-api.de/api/interpreter",
        alias="OVERPASS_URL",
    )
    facility_radius_meters: int = Field(default=16093, alias="FACILITY_RADIUS_METERS")
    facility_timeout_seconds: float = Field(default=35.0, alias="FACILITY_TIMEOUT_SECONDS")
    http_user_agent: str = Field(
        default="MindWellApp/1.0 (+https://mindwell.example)",
        alias="HTTP_USER_AGENT",
    )

    # Wellness feed (NewsAPI)
    news_api_key: str | None = Field(default=None, alias="NEWS_API_KEY")
    news_api_url: str = Field(default="https://newsapi.org/v2/everything", alias="NEWS_API_URL")
    news_query: str = Field(
        default='"mental health" OR wellness OR mindfulness OR wellbeing',
        alias="NEWS_QUERY",
    )
    news_page_size: int = Field(default=15, alias="NEWS_PAGE_SIZE")
    news_timeout_seconds: float = Field(default=10.0, alias="NEWS_TIMEOUT_SECONDS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:8081",
            "http://localhost:8082",
            "http://localhost:8003",
        ],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Strips async driver suffixes so Alembic can run migrations over a
        blocking connection.
        """
        url = self.effective_database_url
        for async_scheme, sync_scheme in ASYNC_DRIVER_SCHEMES:
            if url.startswith(async_scheme):
                return url.replace(async_scheme, sync_scheme, 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def generative_enabled(self) -> bool:
        """Whether a credential for the generative text service is configured."""
        return bool(self.google_api_key)


settings = Settings()  # type: ignore[call-arg]
