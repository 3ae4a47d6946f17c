from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

DEFAULTS: dict[str, object] = {
    "title": "PracticeOps API",
    "version": "0.1.0",
    "log_level": "INFO",
    "cors_origins": ["http://localhost:3000", "http://127.0.0.1:3000"],
    "max_import_items": 5000,
    "export_dir": "exports",
}


@dataclass(frozen=True)
class Settings:
    title: str
    version: str
    log_level: str
    max_import_items: int
    export_dir: Path
    cors_origins: tuple[str, ...] = field(default_factory=tuple)


def _load_settings_file() -> dict:
    path = CONFIG_DIR / "settings.yaml"
    if not path.exists():
        return dict(DEFAULTS)
    with path.open("r", encoding="utf-8") as fp:
        loaded = yaml.safe_load(fp) or {}
    return {**DEFAULTS, **loaded}


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read ``config/settings.yaml`` once and apply environment overrides."""

    data = _load_settings_file()

    origins = data.get("cors_origins") or []
    env_origins = _split_origins(os.getenv("API_CORS_ORIGINS", ""))
    if env_origins:
        origins = env_origins

    log_level = os.getenv("PRACTICEOPS_LOG_LEVEL") or str(data["log_level"])
    max_import = os.getenv("PRACTICEOPS_MAX_IMPORT") or data["max_import_items"]
    export_dir = os.getenv("PRACTICEOPS_EXPORT_DIR") or str(data["export_dir"])

    export_path = Path(export_dir).expanduser()
    if not export_path.is_absolute():
        export_path = Path(__file__).resolve().parents[2] / export_path

    return Settings(
        title=str(data["title"]),
        version=str(data["version"]),
        log_level=log_level.upper(),
        max_import_items=int(max_import),
        export_dir=export_path,
        cors_origins=tuple(str(origin) for origin in origins),
    )
