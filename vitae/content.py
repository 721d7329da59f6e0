"""Content Store: read-only access to the CV and portfolio JSON documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union


class ContentFetchError(Exception):
    pass


def freeze(value: Any) -> Any:
    """Recursively turn dicts into read-only mappings and lists into tuples."""
    if isinstance(value, dict):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(freeze(v) for v in value)
    return value


class ContentStore:
    """Fetches content documents by absolute site path (``/data/cv.json``).

    Documents are parsed once, frozen, and kept for the store's lifetime; a
    language switch re-reads the resident record and never fetches again.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()
        self._cache: Dict[str, Mapping[str, Any]] = {}

    def _resolve(self, path: str) -> Path:
        if not path.startswith("/"):
            raise ContentFetchError(f"Content path must be absolute: {path!r}")
        target = (self.root / path.lstrip("/")).resolve()
        if self.root != target and self.root not in target.parents:
            raise ContentFetchError(f"Content path escapes site root: {path!r}")
        return target

    def fetch(self, path: str) -> Mapping[str, Any]:
        if path in self._cache:
            return self._cache[path]

        target = self._resolve(path)
        try:
            raw = target.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ContentFetchError(f"Content document not found: {path}") from exc
        except OSError as exc:
            raise ContentFetchError(f"Failed to read {path}: {exc}") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ContentFetchError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ContentFetchError(f"Content document {path} is not a JSON object")

        record = freeze(data)
        self._cache[path] = record
        logging.info(f"Loaded content document {path} ({len(raw)} bytes)")
        return record
