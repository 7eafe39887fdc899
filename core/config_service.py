import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.logger import mask_secret

CONFIG_SECTION = "cexio"

ENV_API_KEY = "CEXIO_API_KEY"
ENV_API_SECRET = "CEXIO_API_SECRET"
ENV_USERNAME = "CEXIO_USERNAME"
ENV_TIMEOUT = "CEXIO_TIMEOUT"


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    username: Optional[str] = None
    timeout_seconds: int = Field(10, gt=0)
    force_restrict: bool = Field(True, description="Accepted for compatibility; no throttling is applied")
    nonce_start: Optional[int] = None
    base_url: str = "https://cex.io/api/"

    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret and self.username)

    def masked(self) -> "ClientConfig":
        return self.model_copy(
            update={
                "api_key": mask_secret(self.api_key) or None,
                "api_secret": mask_secret(self.api_secret) or None,
            }
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ClientConfig":
        environ = os.environ if environ is None else environ
        data = {
            "api_key": environ.get(ENV_API_KEY) or None,
            "api_secret": environ.get(ENV_API_SECRET) or None,
            "username": environ.get(ENV_USERNAME) or None,
        }
        if environ.get(ENV_TIMEOUT):
            data["timeout_seconds"] = environ[ENV_TIMEOUT]
        data.update(overrides)
        try:
            return cls(**data)
        except ValidationError as exc:
            raise ValueError(f"Config validation error: {exc}") from exc


class ConfigService:
    def __init__(self, default_path: Path = Path("config/cexio.yaml")) -> None:
        self.default_path = default_path
        self.config = ClientConfig()
        self.last_loaded: Optional[Path] = None

    def has_required_keys(self) -> bool:
        return self.config.has_credentials()

    def load(self, path: Optional[Path] = None) -> ClientConfig:
        path = Path(path or self.default_path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config validation error: expected a mapping in {path}")
        section = data.get(CONFIG_SECTION, data) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Config validation error: '{CONFIG_SECTION}' must be a mapping in {path}")
        try:
            self.config = ClientConfig(**section)
            self.last_loaded = path
            return self.config
        except ValidationError as exc:
            raise ValueError(f"Config validation error: {exc}") from exc

    def save(self, path: Optional[Path] = None, *, include_secrets: bool = False) -> Path:
        path = Path(path or self.default_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        config = self.config if include_secrets else self.config.masked()
        with path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump({CONFIG_SECTION: config.model_dump()}, fh, allow_unicode=True)
        self.last_loaded = path
        return path
