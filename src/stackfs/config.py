"""Configuration loading with environment variable substitution."""

import hashlib
import json
import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from stackfs.materialize import DEFAULT_MAX_MEMORY
from stackfs.observability import LogLevel
from stackfs.utils.units import parse_size

ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)\}")


def substitute_env_vars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} patterns with environment variables."""
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable {var_name} is not set")
            return env_value

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]
    return value


class SFTPConfig(BaseModel):
    """SSH connection settings for the sftp backend."""

    host: str
    port: int = 22
    username: str | None = None
    password: str | None = None
    key_filename: str | None = None


class BackendConfig(BaseModel):
    """Innermost store configuration."""

    type: str = "local"  # local | null | sftp | any registered entry point
    path: str | None = None  # Root directory, local or remote
    sftp: SFTPConfig | None = None

    @model_validator(mode="after")
    def _check_required(self) -> "BackendConfig":
        if self.type == "local" and not self.path:
            raise ValueError("local backend requires a path")
        return self


class PolicyConfig(BaseModel):
    """Policy layers applied on top of the backend."""

    hash: str | None = None  # Any hashlib algorithm name, e.g. "sha256"
    limit: int | None = None  # Bytes, or a size string such as "32MB"
    unique: bool = False
    read_only: bool = False
    write_only: bool = False

    @field_validator("hash")
    @classmethod
    def _check_hash(cls, value: str | None) -> str | None:
        if value is None:
            return None

        name = value.lower()
        if name not in hashlib.algorithms_available:
            raise ValueError(f"Unknown hash algorithm: {value}")
        # shake_* digests have no fixed length, so hexdigest() needs one
        if hashlib.new(name).digest_size == 0:
            raise ValueError(f"Hash algorithm {value} has no fixed digest size")
        return name

    @field_validator("limit", mode="before")
    @classmethod
    def _parse_limit(cls, value: Any) -> int | None:
        return None if value is None else parse_size(value)

    @model_validator(mode="after")
    def _check_access(self) -> "PolicyConfig":
        if self.read_only and self.write_only:
            raise ValueError("read_only and write_only are mutually exclusive")
        return self


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: LogLevel = LogLevel.INFO
    format: Literal["json", "text"] = "json"


class StoreConfig(BaseModel):
    """Main configuration for a store chain."""

    backend: BackendConfig = Field(default_factory=lambda: BackendConfig(type="null"))
    policies: PolicyConfig = Field(default_factory=PolicyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    max_memory: int = DEFAULT_MAX_MEMORY

    @field_validator("max_memory", mode="before")
    @classmethod
    def _parse_max_memory(cls, value: Any) -> int:
        return parse_size(value)

    @classmethod
    def from_file(cls, path: str | Path) -> "StoreConfig":
        """Load configuration from a YAML or JSON file."""
        path = Path(path)
        with path.open() as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        data = substitute_env_vars(data or {})
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StoreConfig":
        """Load configuration from a dictionary."""
        data = substitute_env_vars(data)
        return cls.model_validate(data)
