"""Environment-driven configuration for aureate."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class Settings:
    """Runtime settings loaded from environment variables."""

    output_format: str
    encoding: str
    log_level: str
    logging_config: Path | None = None

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables with sensible defaults."""

        output_format = os.getenv("AUREATE_FORMAT", "prettyj").lower()
        encoding = os.getenv("AUREATE_ENCODING", "utf-8")
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        logging_config = os.getenv("LOGGING_CONFIG")
        return cls(
            output_format=output_format,
            encoding=encoding,
            log_level=log_level,
            logging_config=Path(logging_config) if logging_config else None,
        )
