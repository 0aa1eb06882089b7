from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging
import yaml

from .errors import ConfigError

DATA_PATH_DEFAULT = "~/.local/share/sincewhen/events.json"

@dataclass
class AppConfig:
    timezone: str
    data_path: str
    log_level: str

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

def _check_timezone(name: str) -> str:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ConfigError(f"Unknown timezone {name!r}") from exc
    return name

def _check_log_level(name: str) -> str:
    # getLevelName maps known names to their numeric level
    if not isinstance(logging.getLevelName(name), int):
        raise ConfigError(f"Unknown log_level {name!r}")
    return name

def load_config(path: Optional[str]) -> AppConfig:
    data: Dict[str, Any] = {}
    if path:
        p = Path(path).expanduser()
        if p.exists():
            try:
                loaded = yaml.safe_load(p.read_text(encoding="utf-8"))
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigError(f"Could not read config {p}: {exc}") from exc
            if loaded is not None and not isinstance(loaded, dict):
                raise ConfigError(f"Config {p} must be a mapping, got {type(loaded).__name__}")
            data = loaded or {}

    return AppConfig(
        timezone=_check_timezone(str(data.get("timezone", "UTC"))),
        data_path=str(data.get("data_path", DATA_PATH_DEFAULT)),
        log_level=_check_log_level(str(data.get("log_level", "WARNING")).upper()),
    )
