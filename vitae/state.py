from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from vitae.config import DEFAULT_LANG, STORAGE_KEY


@dataclass
class AppState:
    """What every render function reads: the loaded record and the active language."""

    data: Optional[Mapping[str, Any]] = None
    lang: str = DEFAULT_LANG


class MemoryStorage:
    """Persisted-preference namespace kept in a dict (tests, CLI)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class CookieStorage:
    """Persisted-preference namespace backed by request cookies.

    Reads come from the incoming cookies; writes are collected and applied to
    the outgoing response with ``apply``.
    """

    max_age = 60 * 60 * 24 * 365

    def __init__(self, cookies: Mapping[str, str]):
        self._incoming = dict(cookies)
        self.pending: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        if key in self.pending:
            return self.pending[key]
        return self._incoming.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.pending[key] = value

    def apply(self, response) -> None:
        for key, value in self.pending.items():
            response.set_cookie(key, value, max_age=self.max_age, samesite="Lax", path="/")


def read_preference(storage) -> Optional[str]:
    return storage.get_item(STORAGE_KEY) if storage is not None else None


def write_preference(storage, lang: str) -> None:
    if storage is not None:
        storage.set_item(STORAGE_KEY, lang)
