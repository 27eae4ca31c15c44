"""
config — Loads config.yaml with env var overrides.

Precedence: env vars > config.yaml > defaults.
config.yaml is $MEDIAINDEX_CONFIG, else ./config.yaml, else the per-user config dir.
"""
from __future__ import annotations
import os
from pathlib import Path
from dataclasses import dataclass
import yaml

from .paths import user_config_file


@dataclass
class Config:
    # Transport
    relay_url: str = "http://localhost:3000"  # origin of the local /proxy relay; empty = skip
    remote_relay_prefix: str = "https://r.jina.ai/"
    request_timeout: float = 15.0

    # Crawl
    max_depth: int = 4
    throttle_ms: int = 800

    # Metadata lookup (TMDB)
    tmdb_api_key: str = ""
    tmdb_rate_limit_rps: float = 4.0

    # Playlist normalization
    default_country: str = "UK"
    group_prefix: str = "UK"

    log_level: str = "INFO"


def load_config(config_path: str | Path | None = None) -> Config:
    """Load config from YAML file, then override with env vars."""
    cfg = Config()

    # 1. Load from YAML if available
    if config_path is None:
        config_path = os.environ.get("MEDIAINDEX_CONFIG")
    if config_path is None:
        local = Path("config.yaml")
        path = local if local.exists() else user_config_file()
    else:
        path = Path(config_path)
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        for key, value in data.items():
            key_norm = key.replace("-", "_")
            if hasattr(cfg, key_norm) and value is not None:
                setattr(cfg, key_norm, value)

    # 2. Override with env vars (MEDIAINDEX_ prefix)
    env_map = {
        "MEDIAINDEX_RELAY_URL": "relay_url",
        "MEDIAINDEX_REMOTE_RELAY": "remote_relay_prefix",
        "MEDIAINDEX_TIMEOUT": "request_timeout",
        "MEDIAINDEX_MAX_DEPTH": "max_depth",
        "MEDIAINDEX_THROTTLE_MS": "throttle_ms",
        "TMDB_API_KEY": "tmdb_api_key",
        "MEDIAINDEX_TMDB_RATE_LIMIT": "tmdb_rate_limit_rps",
        "MEDIAINDEX_COUNTRY": "default_country",
        "MEDIAINDEX_GROUP_PREFIX": "group_prefix",
        "MEDIAINDEX_LOG_LEVEL": "log_level",
    }
    for env_key, attr in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            field_type = type(getattr(cfg, attr))
            if field_type == int:
                setattr(cfg, attr, int(val))
            elif field_type == float:
                setattr(cfg, attr, float(val))
            else:
                setattr(cfg, attr, val)

    return cfg
