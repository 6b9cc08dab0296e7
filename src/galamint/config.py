"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GALACHAIN_API = (
    "https://gateway-testnet.galachain.com/api/testnet01/"
    "gc-a9b8b472b035c0510508c248d1110d3162b7e5f4-GalaChainToken"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Database
    # ======================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/galamint.db",
        description="Database connection URL",
    )

    # ======================
    # Chain gateway
    # ======================
    galachain_api: str = Field(
        default=DEFAULT_GALACHAIN_API,
        description="GalaChain token-contract gateway base URL",
    )
    galachain_timeout: float = Field(
        default=30.0, description="Gateway request timeout in seconds"
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=4000, description="API server port")
    api_prefix: str = Field(default="api", description="Route prefix for business endpoints")
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of CORS origins",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    @property
    def origins(self) -> list[str]:
        """Parse allowed origins into a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def route_prefix(self) -> str:
        """Normalized route prefix ("" or "/api")."""
        prefix = self.api_prefix.strip("/")
        return f"/{prefix}" if prefix else ""

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "api_prefix": self.route_prefix,
            "database_url": self._redact_url(self.database_url),
            "galachain_api": self.galachain_api,
            "galachain_timeout": self.galachain_timeout,
            "allowed_origins": self.origins,
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact sensitive parts of database URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
