"""Configuration management."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_HEIGHTMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Generation
    min_size_factor: int = Field(default=2, ge=1, description="Smallest allowed size factor")
    max_size_factor: int = Field(default=12, ge=1, description="Largest allowed size factor")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # Benchmarking
    benchmark_log_path: str = Field(
        default="benchmark/log.txt", description="File benchmark results are appended to"
    )

    @model_validator(mode="after")
    def _check_size_bounds(self) -> "Settings":
        if self.max_size_factor < self.min_size_factor:
            raise ValueError(
                f"max_size_factor ({self.max_size_factor}) must not be smaller "
                f"than min_size_factor ({self.min_size_factor})"
            )
        return self


settings = Settings()
