from pathlib import Path
import os
import re
import uuid
from typing import Dict, Optional

from storefront.config import get_settings

STORAGE_ROOT = Path(get_settings().CART_STORAGE_DIR)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


class LocalStorage:
    """Key/value store of text blobs, one file per key under ``root``.

    Mirrors the browser localStorage surface (get/set/remove by string key)
    so the cart can survive restarts of the process that owns it.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else STORAGE_ROOT

    def _path(self, key: str) -> Path:
        if not key or not _KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        _ensure_dir(self.root)
        # Write to a sibling temp file then swap, so readers never see half a blob
        tmp = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.is_file():
            path.unlink()


class MemoryStorage:
    """In-process storage with the same interface as LocalStorage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)
