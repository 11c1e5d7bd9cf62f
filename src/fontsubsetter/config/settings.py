"""Configuration settings for Fontsubsetter."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PathsConfig(BaseModel):
    """Where fonts are read from and written to."""

    model_config = ConfigDict(frozen=True)

    source_dir: Path = Field(
        default=Path("./fonts/source"),
        description="Directory containing the input fonts",
    )
    target_dir: Path = Field(
        default=Path("./fonts/output"),
        description="Directory receiving WOFF2 files and the report",
    )
    char_file: Path = Field(
        default=Path("./charset.txt"),
        description="Text file listing the characters to keep",
    )


class SubsetConfig(BaseModel):
    """Configuration for the subsetting engine and batch execution."""

    model_config = ConfigDict(frozen=True)

    hinting: bool = Field(
        default=False,
        description="Keep TrueType hinting instructions in the output",
    )
    timeout_seconds: float | None = Field(
        default=300.0,
        ge=0.0,
        description="Per-font engine timeout in seconds (None or 0 = no timeout)",
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Number of fonts processed at once",
    )

    @field_validator("timeout_seconds")
    @classmethod
    def _zero_disables_timeout(cls, value: float | None) -> float | None:
        if value is not None and value == 0:
            return None
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SubsetterSettings(BaseModel):
    """Main application settings."""

    model_config = ConfigDict(frozen=True)

    paths: PathsConfig = Field(default_factory=PathsConfig)
    subset: SubsetConfig = Field(default_factory=SubsetConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SubsetterSettings:
    """Get default application settings."""
    return SubsetterSettings()
