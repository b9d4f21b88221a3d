"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ward_registry.lib.preferences import PreferenceSentinels
from ward_registry.schemas.printing import MAX_CONFIRM_IDS


def _parse_id_triple(value: str) -> tuple[int, int, int]:
    """Parse a comma-separated list of exactly three candidate IDs."""
    parts = [p.strip() for p in value.split(",") if p.strip()]
    if len(parts) != 3:
        msg = "candidate ID triple must contain exactly three comma-separated integers"
        raise ValueError(msg)
    try:
        first, second, third = (int(p) for p in parts)
    except ValueError as exc:
        msg = f"candidate ID triple contains a non-integer value: {value!r}"
        raise ValueError(msg) from exc
    return first, second, third


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        description="Async SQLAlchemy connection string (e.g. postgresql+asyncpg://...)",
    )

    # JWT (tokens are issued by the external auth service; we only verify them)
    jwt_secret_key: str = Field(min_length=32, description="Secret key for verifying JWTs (minimum 32 characters)")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regex pattern for allowed CORS origins",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )

    # Election cycle
    election_year: int = Field(
        default=2025,
        description="Election year whose leader records are reported and printed",
        ge=1900,
    )

    # Report cache
    cache_enabled: bool = Field(
        default=True,
        description="Enable the report response cache",
    )
    cache_ttl_seconds: int = Field(
        default=300,
        description="Report cache entry time-to-live in seconds",
        gt=0,
    )
    cache_max_entries: int = Field(
        default=10_000,
        description="Entry cap of the in-process cache; least recently used entries are evicted first",
        gt=0,
    )
    redis_url: str | None = Field(
        default=None,
        description="Redis URL (redis://host:6379/0). When set, all API workers share one report cache in Redis",
    )

    # Print batches
    print_batch_default_limit: int = Field(
        default=50,
        description="Default number of records returned by a fetch-for-print call",
        gt=0,
    )
    print_batch_max_limit: int = Field(
        default=500,
        description="Hard cap on records returned by a fetch-for-print call",
        gt=0,
        le=MAX_CONFIRM_IDS,
    )

    # Voting preference sentinels
    preference_cycle: str = Field(
        default="2025",
        description="Label of the election cycle the sentinel candidate IDs belong to",
    )
    undecided_candidate_ids: str = Field(
        default="679,680,681",
        description="Congressman, governor, vice governor IDs meaning 'explicitly undecided'",
    )
    straight_candidate_ids: str = Field(
        default="660,662,676",
        description="Congressman, governor, vice governor IDs of the straight-ticket lineup",
    )

    @field_validator("undecided_candidate_ids", "straight_candidate_ids")
    @classmethod
    def validate_candidate_triple(cls, v: str) -> str:
        _parse_id_triple(v)
        return v

    @property
    def preference_sentinels(self) -> PreferenceSentinels:
        """Build the classifier sentinel configuration for the current cycle."""
        return PreferenceSentinels(
            undecided=_parse_id_triple(self.undecided_candidate_ids),
            straight=_parse_id_triple(self.straight_candidate_ids),
            cycle=self.preference_cycle,
        )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
