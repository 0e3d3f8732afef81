"""
Application Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).

The Chatwoot credentials (base URL + personal access token) are the only
required values for running operations. Trigger settings are only read when
TRIGGER_ENABLED is set.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings documented in .env.example.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # CHATWOOT CREDENTIALS
    # ========================================================================
    CHATWOOT_URL: str = Field(
        default="https://app.chatwoot.com",
        description="Base URL of the Chatwoot instance (trailing slash is stripped)",
    )
    CHATWOOT_ACCESS_TOKEN: str = Field(
        default="",
        description="Personal access token from Profile settings > Access Token",
    )

    # ========================================================================
    # OPERATIONS
    # ========================================================================
    NODE_NAME: str = Field(default="Chatwoot", description="Name attributed to operation errors")
    QR_POLL_MAX_ATTEMPTS: int = Field(default=20, ge=1, description="Inbox polls before giving up on a QR code")
    QR_POLL_INTERVAL_SECONDS: float = Field(default=3.0, ge=0.0, description="Delay between inbox polls")

    # ========================================================================
    # WEBHOOK TRIGGER
    # ========================================================================
    TRIGGER_ENABLED: bool = Field(default=False)
    TRIGGER_NODE_NAME: str = Field(default="Chatwoot Trigger")
    TRIGGER_ACCOUNT_ID: str = Field(default="")
    TRIGGER_EVENTS: str = Field(
        default="conversation_created,message_created",
        description="Comma-separated webhook subscriptions",
    )
    TRIGGER_INBOX_ID: str = Field(default="all", description="Inbox filter, 'all' for every inbox")
    TRIGGER_ACTIVATION_MODE: str = Field(default="trigger", pattern="^(trigger|manual)$")
    TRIGGER_EVENT_QUEUE_SIZE: int = Field(
        default=1000, ge=1, description="Undrained deliveries kept; the oldest is dropped when full"
    )
    PUBLIC_BASE_URL: str = Field(
        default="http://localhost:8000",
        description="Externally reachable base URL; the callback is <PUBLIC_BASE_URL>/webhook",
    )

    # ========================================================================
    # REDIS (webhook registration store)
    # ========================================================================
    REDIS_URL: str = Field(default="", description="Empty selects the in-memory store")
    REDIS_KEY_PREFIX: str = Field(default="chatwoot:trigger:")

    # ========================================================================
    # OPENTELEMETRY
    # ========================================================================
    OTEL_EXPORTER_OTLP_ENDPOINT: str = Field(default="http://localhost:4317")
    OTEL_SERVICE_NAME: str = Field(default="chatwoot-service")
    OTEL_TRACES_ENABLED: bool = Field(default=False)

    # ========================================================================
    # API SERVER
    # ========================================================================
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)
    API_CORS_ORIGINS: str = Field(default="http://localhost:5678")

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")

    # ========================================================================
    # DEPLOYMENT
    # ========================================================================
    ENVIRONMENT: str = Field(
        default="development", pattern="^(development|staging|production)$"
    )

    @property
    def trigger_events(self) -> list[str]:
        """Subscriptions parsed from TRIGGER_EVENTS."""
        return [event.strip() for event in self.TRIGGER_EVENTS.split(",") if event.strip()]

    @property
    def trigger_webhook_url(self) -> str:
        """Public callback URL registered with Chatwoot."""
        return f"{self.PUBLIC_BASE_URL.rstrip('/')}/webhook"
