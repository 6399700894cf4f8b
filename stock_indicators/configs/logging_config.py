"""Logging configuration model."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Console/file logging settings consumed by ``setup_logging``."""

    log_level: str = "INFO"
    log_dir: str = "logs"
    log_file: Optional[str] = "indicators.log"  # None disables file logging
    use_rich: bool = True
    log_json_format: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LEVELS:
            raise ValueError(f"log_level must be one of {_LEVELS}, got '{v}'")
        return level

    def get_log_path(self) -> Optional[Path]:
        if self.log_file is None:
            return None
        return Path(self.log_dir) / self.log_file
