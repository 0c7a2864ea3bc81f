"""Configuration settings for the lobby scout engine."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # OP.GG MCP Configuration
    opgg_mcp_url: str = Field(default="https://mcp-api.op.gg/mcp")
    default_region: str = Field(default="na")

    # Transport Configuration
    request_timeout: float = Field(
        default=15.0, gt=0, description="Seconds to wait for a single remote call"
    )
    request_spacing: float = Field(
        default=1.0, ge=0, description="Minimum seconds between outbound calls"
    )
    cache_ttl: float = Field(
        default=300.0, gt=0, description="Seconds a cached response stays valid"
    )
    cache_maxsize: int = Field(default=1000, ge=1)

    # Analysis Configuration
    player_timeout: float = Field(
        default=45.0, gt=0, description="Seconds allowed for one player's analysis"
    )
    history_count: int = Field(
        default=70, ge=1, description="Matches requested per player"
    )
    display_match_count: int = Field(
        default=10, ge=0, description="Matches kept on each analysis result"
    )
    sort_history_by_timestamp: bool = Field(
        default=False,
        description="Re-sort match history by creation time instead of trusting upstream order",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="LOBBY_SCOUT_",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
