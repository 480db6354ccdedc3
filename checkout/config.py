from pathlib import Path
from typing import Any, Mapping, Optional
import logging
import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .runner import ScanPolicy

class CheckoutConfig(BaseModel):
    catalogue_path: Optional[Path] = Field(None, description="JSON catalogue used by batch and HTTP modes.")
    scan_policy: ScanPolicy = Field(ScanPolicy.SKIP, description="What to do with SKUs missing from the catalogue.")
    log_level: str = "WARNING"
    host: str = "127.0.0.1"
    port: int = Field(3111, ge=1, le=65535)

    @model_validator(mode="wrap")
    @classmethod
    def _as_config_error(cls, data: Any, handler):
        try:
            return handler(data)
        except ValidationError as e:
            raise ConfigError(f"invalid checkout configuration: {e}") from e

    @field_validator("scan_policy", mode="before")
    @classmethod
    def _parse_policy(cls, value):
        return ScanPolicy.parse(value)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CheckoutConfig":
        """Read CHECKOUT_* variables, after loading a .env file if there is one."""
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ
        mapping = {
            "catalogue_path": "CHECKOUT_CATALOGUE",
            "scan_policy": "CHECKOUT_SCAN_POLICY",
            "log_level": "CHECKOUT_LOG_LEVEL",
            "host": "CHECKOUT_HOST",
            "port": "CHECKOUT_PORT",
        }
        values = {field: environ[var] for field, var in mapping.items() if environ.get(var)}
        return cls(**values)

    def resolve(self):
        if self.catalogue_path is not None:
            self.catalogue_path = self.catalogue_path.expanduser().resolve()
            if not self.catalogue_path.is_file():
                raise ConfigError(f"catalogue file '{self.catalogue_path}' not found")
        return self
