from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(200):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            return None
        cur = cur.parent
    return None


def assert_safe_data_path(data_path: Path, allow_repo_data_path: bool) -> None:
    # health logs must never end up committed next to source code
    git_root = find_git_root(data_path.parent)
    if git_root is None:
        return
    if allow_repo_data_path:
        logger.warning("using data file inside git repo %s (override enabled)", git_root)
        return
    raise SystemExit(
        "🚫 Refusing to use a data file inside a git repo.\n"
        f"   data_path: {data_path}\n"
        f"   repo_root: {git_root}\n"
        "   Fix: use ~/.config/cyclenotes/*.json or pass --allow-repo-data-path"
    )
