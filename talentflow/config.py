"""
config.py — TalentFlow application settings.

Usage:
    from talentflow.config import settings
    print(settings.company_name)

Import the module-level singleton directly; do not construct Settings() per call.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TALENTFLOW_",
        case_sensitive=False,
        extra="ignore",  # Silently ignore any extra env vars
    )

    # --- Offer letters ---
    company_name: str = "TalentFlow Solutions"
    default_hr_name: str = "HR Manager"

    # --- Logging ---
    # Overrides the debug-derived level when set (e.g. "WARNING")
    log_level: str = ""

    # --- Application ---
    debug: bool = False
    app_version: str = "0.1.0"

    @property
    def effective_log_level(self) -> str:
        """Explicit log_level wins; otherwise DEBUG in debug mode, INFO elsewhere."""
        if self.log_level.strip():
            return self.log_level.strip().upper()
        return "DEBUG" if self.debug else "INFO"


# Module-level singleton, imported throughout the codebase
settings = Settings()
