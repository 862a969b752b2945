"""
Configuration for sheetcal.

Non-secret settings live in ``args/sheetcal.yaml``; spreadsheet credentials
come from the environment (optionally via a ``.env`` file loaded by the app):

    SPREADSHEET_ID          spreadsheet to use
    SERVICE_ACCOUNT_EMAIL   service account client email
    PRIVATE_KEY             service account PEM key (``\\n`` escapes allowed)

Overrides:
    SHEETCAL_CONFIG         alternate YAML path
    SHEETCAL_BACKEND        google | memory
    SHEETCAL_SHEET_NAME     sheet (tab) holding the events
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from sheetcal import CONFIG_PATH

logger = logging.getLogger(__name__)


class SheetsConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    sheet_name: str = Field(default="work05_sche", min_length=1)
    backend: Literal["google", "memory"] = Field(default="google")
    timeout_seconds: float = Field(default=30.0, gt=0)
    value_input_option: Literal["USER_ENTERED", "RAW"] = Field(default="USER_ENTERED")


class MapperConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    serialize_writes: bool = Field(default=False)
    skip_blank_rows: bool = Field(default=False)


class ApiConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)
    prefix: str = Field(default="/api")
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )


class CredentialsConfig(BaseModel):
    spreadsheet_id: Optional[str] = None
    service_account_email: Optional[str] = None
    private_key: Optional[str] = None

    def missing(self) -> list[str]:
        names = {
            "spreadsheet_id": "SPREADSHEET_ID",
            "service_account_email": "SERVICE_ACCOUNT_EMAIL",
            "private_key": "PRIVATE_KEY",
        }
        return [env for attr, env in names.items() if not getattr(self, attr)]


class SheetCalConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)
    mapper: MapperConfig = Field(default_factory=MapperConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig, exclude=True)


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        logger.debug(f"Config file not found at {path}, using defaults")
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(path: Path | str | None = None, environ: Mapping[str, str] | None = None) -> SheetCalConfig:
    """Load YAML settings and merge in environment credentials and overrides."""
    env = os.environ if environ is None else environ
    if path is None:
        path = env.get("SHEETCAL_CONFIG") or CONFIG_PATH

    raw = _read_yaml(Path(path))
    sheets = dict(raw.get("sheets") or {})
    if env.get("SHEETCAL_BACKEND"):
        sheets["backend"] = env["SHEETCAL_BACKEND"]
    if env.get("SHEETCAL_SHEET_NAME"):
        sheets["sheet_name"] = env["SHEETCAL_SHEET_NAME"]
    raw["sheets"] = sheets

    raw["credentials"] = {
        "spreadsheet_id": env.get("SPREADSHEET_ID"),
        "service_account_email": env.get("SERVICE_ACCOUNT_EMAIL"),
        "private_key": env.get("PRIVATE_KEY"),
    }
    return SheetCalConfig(**raw)


__all__ = [
    "ApiConfig",
    "CredentialsConfig",
    "MapperConfig",
    "SheetCalConfig",
    "SheetsConfig",
    "load_config",
]
