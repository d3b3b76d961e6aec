"""KV Backends - Armazenamento chave/valor assíncrono para snapshots."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KVBackend(Protocol):
    """Interface mínima de KV (mesmo formato de ``agentfs.kv``)."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class MemoryKV:
    """KV em memória. Útil para testes e sessões efêmeras."""

    def __init__(self):
        self._storage: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._storage.get(key)

    async def set(self, key: str, value: str) -> None:
        self._storage[key] = value

    async def delete(self, key: str) -> None:
        self._storage.pop(key, None)


class JsonFileKV:
    """KV em disco: um arquivo por chave dentro de ``root``.

    Escrita atômica (arquivo temporário + replace), então um crash durante
    o save nunca deixa um snapshot truncado.

    Example:
        >>> kv = JsonFileKV(Path(".quiz_state"))
        >>> await kv.set("quiz.state.v1", '{"current_index": 0}')
    """

    SUFFIX = ".json"

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Chave inválida: {key!r}")
        return self.root / f"{key}{self.SUFFIX}"

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, self._path(key))

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, self._path(key), value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._path(key).unlink, missing_ok=True)

    # I/O bloqueante, executado em thread para não travar o event loop

    @staticmethod
    def _read(path: Path) -> str | None:
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, path: Path, value: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
