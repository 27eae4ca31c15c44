from __future__ import annotations
from pathlib import Path
from platformdirs import PlatformDirs

APP = "mediaindex"


def _platform() -> PlatformDirs:
    return PlatformDirs(appname=APP, appauthor=False)


def get_dirs() -> dict[str, Path]:
    d = _platform()
    paths = {
        "data": Path(d.user_data_dir),     # exported playlists
        "config": Path(d.user_config_dir), # fallback config.yaml
        "cache": Path(d.user_cache_dir),
        "logs": Path(d.user_log_dir),      # mediaindex.log
    }
    for p in paths.values():
        p.mkdir(parents=True, exist_ok=True)
    return paths


def user_config_file() -> Path:
    """Per-user config.yaml; not created, only looked up."""
    return Path(_platform().user_config_dir) / "config.yaml"
