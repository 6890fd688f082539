"""Configuration models for the build tooling and the HTTP client.

Build settings come from an optional YAML file (``pispi.yaml``); client
settings are passed explicitly to each ``Transport`` instead of living in
process-wide state.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

from pispi_sdk.constants import DEFAULT_API_VERSION, DEFAULT_BASE_URL

DEFAULT_CONFIG_FILE = Path("pispi.yaml")


class BuildConfig(BaseModel):
    """Paths and target constants for the normalize/patch pipeline."""

    model_config = ConfigDict(extra="forbid")

    spec_path: Path = Path("openapi.json")
    generated_dir: Path = Path("src/generated")
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION

    @property
    def openapi_config_path(self) -> Path:
        return self.generated_dir / "core" / "OpenAPI.ts"

    @property
    def models_dir(self) -> Path:
        return self.generated_dir / "models"


class ClientConfig(BaseModel):
    """Connection settings for a PI-SPI API client."""

    base_url: str = DEFAULT_BASE_URL
    access_token: str = ""
    client_cert: Path | None = None  # mTLS
    client_key: Path | None = None
    ca_cert: Path | None = None
    headers: dict[str, str] = {}
    timeout: float = 30.0  # seconds

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            base_url=os.getenv("PISPI_BASE_URL", DEFAULT_BASE_URL),
            access_token=os.getenv("PISPI_ACCESS_TOKEN", ""),
        )


def load_build_config(path: Path | None = None) -> BuildConfig:
    """Load build settings from a YAML file.

    A missing or empty file yields the defaults. Unknown keys raise
    ``pydantic.ValidationError``.
    """
    path = path or DEFAULT_CONFIG_FILE
    if not path.exists():
        return BuildConfig()

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return BuildConfig.model_validate(data or {})
