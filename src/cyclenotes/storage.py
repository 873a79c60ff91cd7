from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any

from .store import EntryStore

logger = logging.getLogger(__name__)


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def load_json(path: Path) -> dict[str, Any]:
    """
    Safe load:
    - missing/empty -> writes {} and returns it
    - corrupt -> raw text backed up beside the file, then reset to {}
    - non-object JSON -> {}
    """
    path = Path(path)
    _ensure_parent(path)

    if not path.exists():
        save_json(path, {})
        return {}

    txt = path.read_text(encoding="utf-8").strip()
    if not txt:
        save_json(path, {})
        return {}

    try:
        data = json.loads(txt)
    except json.JSONDecodeError as e:
        backup = path.with_suffix(f".corrupt-{int(time.time())}.json")
        backup.write_text(txt, encoding="utf-8")
        logger.warning("corrupt data file %s (%s); backed up to %s", path, e, backup)
        save_json(path, {})
        return {}

    if not isinstance(data, dict):
        logger.warning("data file %s does not hold a JSON object; ignoring it", path)
        return {}
    return data


def save_json(path: Path, data: Any) -> None:
    """
    Atomic-ish save: temp file in the same directory, fsync, os.replace,
    then chmod 0600 best-effort.
    """
    path = Path(path)
    _ensure_parent(path)

    tmp = path.with_name(path.name + ".tmp")
    payload = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"

    with open(tmp, "w", encoding="utf-8") as f:
        f.write(payload)
        f.flush()
        os.fsync(f.fileno())

    os.replace(tmp, path)

    try:
        os.chmod(path, 0o600)
    except OSError:
        logger.debug("could not chmod %s", path)


def load_store(path: Path) -> EntryStore:
    store = EntryStore.from_payload(load_json(path))
    logger.debug("loaded %d entries from %s", len(store), path)
    return store


def save_store(path: Path, store: EntryStore) -> None:
    data = load_json(path)
    data.update(store.to_payload())
    save_json(path, data)
    logger.debug("saved %d entries to %s", len(store), path)
