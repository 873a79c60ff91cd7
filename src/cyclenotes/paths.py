from __future__ import annotations

import os
from pathlib import Path

ENV_VAR = "CYCLENOTES_DATA"


def default_data_path(profile: str | None = None) -> Path:
    base = Path.home() / ".config" / "cyclenotes"
    name = f"{profile}.json" if profile else "data.json"
    return base / name


def resolve_data_path(data_arg: str | None, profile: str | None) -> tuple[Path, str]:
    """
    Pick the data file: --data, then $CYCLENOTES_DATA, then the profile default.
    Returns (path, reason) so `where` can explain the choice.
    """
    if data_arg:
        return Path(data_arg).expanduser().resolve(), "because you passed --data"
    env = os.environ.get(ENV_VAR)
    if env:
        return Path(env).expanduser().resolve(), f"because {ENV_VAR} is set"
    if profile:
        return default_data_path(profile).expanduser().resolve(), f"because you used --profile {profile!r}"
    return default_data_path(None).expanduser().resolve(), "default XDG config location"
