"""Content-addressed cache of reconciled translation sets."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Sequence


def derive_cache_key(raw_source: bytes | str, target_languages: Sequence[str]) -> str:
    """
    Derive a stable cache key from raw source content and the target languages.

    The key changes with any byte of the source content and with the membership
    or order of ``target_languages``. Reordering the same languages therefore
    produces a different key.

    Args:
        raw_source: The source file content exactly as read
        target_languages: Requested language codes, in order

    Returns:
        32-character hex digest
    """
    if isinstance(raw_source, str):
        raw_source = raw_source.encode("utf-8")

    digest = hashlib.md5()
    # Length prefix keeps the content/language boundary unambiguous
    digest.update(len(raw_source).to_bytes(8, "big"))
    digest.update(raw_source)
    digest.update(json.dumps(list(target_languages)).encode("utf-8"))
    return digest.hexdigest()


def cache_file_name(unit_name: str, cache_key: str) -> str:
    """Return the cache file name for a content unit, e.g. 'common.json.<key>.json'."""
    return f"{unit_name}.{cache_key}.json"


class ResultCache:
    """Stores final translation sets as JSON files in a directory."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, unit_name: str, cache_key: str) -> Path:
        return self.directory / cache_file_name(unit_name, cache_key)

    def get(self, unit_name: str, cache_key: str) -> dict | None:
        """
        Load a cached translation set.

        Returns None when there is no entry, or when the entry cannot be read or
        parsed (a corrupted entry is treated like a miss).
        """
        cache_path = self.path_for(unit_name, cache_key)
        if not cache_path.exists():
            return None

        try:
            with open(cache_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            print(f"   Cache corrupted for {unit_name} ({e}), re-translating...")
            return None

        if not isinstance(data, dict):
            print(f"   Cache corrupted for {unit_name} (not a JSON object), re-translating...")
            return None

        return data

    def put(self, unit_name: str, cache_key: str, translations: dict) -> Path:
        """Write a translation set to the cache, replacing any previous entry."""
        self.directory.mkdir(parents=True, exist_ok=True)
        cache_path = self.path_for(unit_name, cache_key)
        with open(cache_path, "w", encoding="utf-8") as f:
            json.dump(translations, f, ensure_ascii=False, indent=2)
        return cache_path
