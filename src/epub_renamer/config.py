"""Renamer configuration via pydantic-settings (.env + env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import (
    DEFAULT_EXTENSION,
    MAX_STEM_LENGTH,
    AuthorOrder,
    NormalizationOptions,
    parse_author_order,
)

LOG_FILE_NAME = "renamer.log"
LOG_ROTATION = "10 MB"
LOG_RETENTION = "30 days"
LOG_FORMAT = (
    "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | {extra[stage]:<12} | {message}"
)


def _with_stage(record) -> bool:
    # Records logged without logger.bind(stage=...) still fill the column
    record["extra"].setdefault("stage", "")
    return True


class RenamerConfig(BaseSettings):
    """All renamer configuration with layered resolution:
    .env file < environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # -- Naming --
    strip_diacritics: bool = False
    apply_title_case: bool = True
    author_format: AuthorOrder = AuthorOrder.FIRST_LAST
    extension: str = DEFAULT_EXTENSION
    max_stem_length: int = MAX_STEM_LENGTH

    # -- Destination --
    output_dir: Path | None = None

    # -- Logging --
    log_dir: Path = Path.home() / ".local" / "state" / "epub-renamer"
    log_level: str = "INFO"
    log_to_file: bool = True
    verbose: bool = False

    @field_validator("author_format", mode="before")
    @classmethod
    def _parse_author_format(cls, value: object) -> AuthorOrder:
        try:
            return parse_author_order(value)  # type: ignore[arg-type]
        except ConfigError as e:
            raise ValueError(str(e)) from e

    @field_validator("max_stem_length")
    @classmethod
    def _positive_stem_length(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_stem_length must be positive")
        return value

    def to_options(self) -> NormalizationOptions:
        """Freeze the naming switches for one batch run."""
        return NormalizationOptions(
            strip_diacritics=self.strip_diacritics,
            apply_title_case=self.apply_title_case,
            author_order=self.author_format,
        )

    @property
    def log_file(self) -> Path:
        return self.log_dir / LOG_FILE_NAME

    def console_level(self) -> str:
        """Stderr level: DEBUG under --verbose, else log_level."""
        return "DEBUG" if self.verbose else self.log_level.upper()

    def setup_logging(self) -> Path | None:
        """Route renamer logs to stderr and, unless disabled, to renamer.log.

        The file sink always records DEBUG so a preview run can be traced
        afterwards. Returns the log file path, or None without a file sink.
        """
        logger.remove()
        logger.add(
            sys.stderr,
            format=LOG_FORMAT,
            level=self.console_level(),
            filter=_with_stage,
        )

        if not self.log_to_file:
            return None

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_file),
            format=LOG_FORMAT,
            level="DEBUG",
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            encoding="utf-8",
            filter=_with_stage,
        )
        return self.log_file
