"""In-process storage gateway. Used by tests and STORAGE_BACKEND=memory."""

from __future__ import annotations


class MemoryStorageGateway:
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def list(self, prefix: str) -> list[str]:
        return [key for key in self._data if key.startswith(prefix)]

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
