"""Configuration management with environment variable support."""

import logging
import os
import secrets
from dataclasses import dataclass, field


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "120"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class GameConfig:
    """Default game configuration."""

    hand_size: int = 8
    ai_think_delay: float = field(
        default_factory=lambda: float(os.getenv("AI_THINK_DELAY", "1.5"))
    )
    default_difficulty: str = field(
        default_factory=lambda: os.getenv("DEFAULT_DIFFICULTY", "MEDIUM").upper()
    )
    surrender_thinking_seconds: int = 1
    surrender_card_gap: int = 2

    def __post_init__(self) -> None:
        """Validate game settings."""
        if self.ai_think_delay < 0:
            raise ValueError("ai_think_delay must not be negative")
        if self.default_difficulty not in ("EASY", "MEDIUM", "HARD"):
            raise ValueError(f"Unknown difficulty: {self.default_difficulty}")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    session_ttl: int = 3600  # Session timeout in seconds

    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def setup_logging(settings: LoggingConfig | None = None) -> None:
    """Configure root logging once at program start."""
    settings = settings or config.logging
    logging.basicConfig(
        level=getattr(logging, settings.level, logging.INFO),
        format=settings.format,
    )


# Global configuration instance
config = AppConfig()
