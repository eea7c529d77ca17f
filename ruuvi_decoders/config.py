"""Configuration management for the Ruuvi decoders."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"

# Bluetooth SIG company identifier assigned to Ruuvi Innovations
RUUVI_COMPANY_ID = 0x0499

DUPLICATE_POLICIES = ("first", "error")


@dataclass
class DecoderConfig:
    """Configuration for advertisement extraction."""

    company_id: int = RUUVI_COMPANY_ID
    duplicates: Literal["first", "error"] = "first"


@dataclass
class LoggingConfig:
    """Configuration for log output of the CLI and MCP server."""

    level: str = "WARNING"


@dataclass
class Config:
    """Root configuration object."""

    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create Config from a dictionary."""
        # Parse decoder config
        dec = data.get("decoder") or {}
        duplicates = dec.get("duplicates", "first")
        if duplicates not in DUPLICATE_POLICIES:
            raise ValueError(
                f"decoder.duplicates must be one of {DUPLICATE_POLICIES}, got {duplicates!r}"
            )
        company_id = dec.get("company_id", RUUVI_COMPANY_ID)
        if isinstance(company_id, str):
            company_id = int(company_id, 0)
        decoder = DecoderConfig(company_id=company_id, duplicates=duplicates)

        # Parse logging config
        log = data.get("logging") or {}
        logging_config = LoggingConfig(level=str(log.get("level", "WARNING")).upper())

        return cls(decoder=decoder, logging=logging_config)


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration from file, falling back to defaults if it is missing."""
    path = Path(path)
    if not path.exists():
        return Config()
    return Config.from_yaml(path)
