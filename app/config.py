"""
Decision Compass Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
Every value has a default, so the service starts with an empty environment.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Sessions ──
    session_ttl_seconds: int = Field(
        default=7200,
        description="Session lifetime measured from creation (seconds)",
    )
    session_retention_seconds: int = Field(
        default=7200,
        description="How long a finished or expired session is kept past its deadline before eviction (seconds)",
    )

    # ── Scoring ──
    full_coverage_answers: int = Field(
        default=10,
        description="Answer count at which answer coverage reaches 100% in confidence scoring",
    )

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )
    log_level: str = Field(default="INFO", description="Root log level")

    # ── Audit ──
    audit_enabled: bool = Field(
        default=True, description="Append scored decisions to the audit log"
    )
    audit_log_path: str = Field(
        default="audit.jsonl", description="Path to JSON-lines audit log file"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance, imported by other modules
settings = Settings()
