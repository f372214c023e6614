from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class DgmodSettings(BaseSettings):
	"""Configuration read from ``DGMOD_*`` environment variables."""

	model_config = SettingsConfigDict(env_prefix="DGMOD_", extra="ignore")

	cargo: str = Field(default="cargo", description="Cargo binary used for workspace metadata")
	log_level: str = Field(default="WARNING", description="Logging level for diagnostics on stderr")
	exclude_tests: bool = Field(default=False, description="Drop `tests` modules from diagrams")

	@field_validator("log_level")
	@classmethod
	def _known_log_level(cls, value: str) -> str:
		level = value.upper()
		if level not in LOG_LEVELS:
			raise ValueError(f"unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}")
		return level


def load_settings() -> DgmodSettings:
	return DgmodSettings()
