from __future__ import annotations

import os, tomli
from pathlib import Path
from functools import lru_cache
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from .gist import GITHUB_API_URL, DEFAULT_USER_AGENT

load_dotenv(override=False)


def settings_file() -> Path:
    return Path(os.getenv("GISTER_SETTINGS") or Path.home() / ".gister.toml")


def default_token_file() -> Path:
    # Holds the `username:token` string
    return Path(os.getenv("GIST_CONFIG") or Path.home() / ".gist")


@dataclass(frozen=True)
class ApiCfg:
    url: str = GITHUB_API_URL
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class DefaultsCfg:
    public: bool = False
    anonymous: bool = False


@dataclass(frozen=True)
class AppConfig:
    api: ApiCfg
    defaults: DefaultsCfg
    token_file: Path
    # Only the secret comes from the environment
    token: Optional[str]


def _coerce_bool(val, default: bool) -> bool:
    # TOML booleans pass through; quoted "true"/"false" are accepted too
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        lowered = val.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
    return default


@lru_cache
def _raw_toml(path: Path) -> dict:
    if path.exists():
        with path.open("rb") as f:
            return tomli.load(f)
    return {}


@lru_cache
def load_app_config(token_file: Optional[str] = None) -> AppConfig:
    raw = _raw_toml(settings_file())
    api = raw.get("api", {})
    defaults = raw.get("defaults", {})

    api_cfg = ApiCfg(
        url=str(api.get("url", ApiCfg.url)),
        user_agent=str(api.get("user_agent", ApiCfg.user_agent)),
    )
    defaults_cfg = DefaultsCfg(
        public=_coerce_bool(defaults.get("public"), DefaultsCfg.public),
        anonymous=_coerce_bool(defaults.get("anonymous"), DefaultsCfg.anonymous),
    )
    return AppConfig(
        api=api_cfg,
        defaults=defaults_cfg,
        token_file=Path(token_file) if token_file else default_token_file(),
        token=os.getenv("GIST_TOKEN") or None,
    )


def read_token(path: Path) -> str:
    """Return the trimmed contents of the token file. Raises OSError."""
    return path.read_text(encoding="utf-8").strip()


def resolve_token(cfg: AppConfig) -> str:
    """GIST_TOKEN wins over the token file. Raises OSError if neither exists."""
    if cfg.token:
        return cfg.token.strip()
    return read_token(cfg.token_file)
