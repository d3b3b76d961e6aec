"""Session Store - Persistência do snapshot da sessão de quiz."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..exceptions import PersistenceError
from .kv import KVBackend

logger = logging.getLogger(__name__)


class SessionStore:
    """Persiste o snapshot de um QuizEngine como texto JSON em uma única chave.

    A chave é versionada (``quiz.state.v1``) para permitir migração futura do
    formato sem colidir com snapshots antigos.

    Falhas do backend viram ``PersistenceError``; quem decide ignorar (log e
    segue em memória) é a sessão.

    Example:
        >>> store = SessionStore(MemoryKV())
        >>> await store.save(engine.to_state())
        >>> snapshot = await store.load()
    """

    DEFAULT_KEY = "quiz.state.v1"

    def __init__(self, kv: KVBackend, key: str = DEFAULT_KEY):
        self.kv = kv
        self.key = key

    async def save(self, snapshot: dict[str, Any]) -> None:
        try:
            raw = json.dumps(snapshot, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceError(
                "Snapshot não serializável em JSON", details={"key": self.key, "error": str(e)}
            ) from e

        try:
            await self.kv.set(self.key, raw)
        except Exception as e:
            raise PersistenceError(
                "Falha ao salvar snapshot", details={"key": self.key, "error": str(e)}
            ) from e

        logger.debug(f"Snapshot salvo em {self.key}")

    async def load(self) -> dict[str, Any] | None:
        """Carrega o snapshot salvo.

        Returns:
            Dict do snapshot, ou None se nada foi salvo ou o valor não é
            um objeto JSON
        """
        try:
            raw = await self.kv.get(self.key)
        except Exception as e:
            raise PersistenceError(
                "Falha ao ler snapshot", details={"key": self.key, "error": str(e)}
            ) from e

        if not raw:
            logger.debug(f"Nenhum snapshot em {self.key}")
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(
                "Snapshot corrompido", details={"key": self.key, "error": str(e)}
            ) from e

        if not isinstance(data, dict):
            logger.warning(f"Snapshot em {self.key} não é um objeto JSON, ignorando")
            return None

        return data

    async def clear(self) -> None:
        try:
            await self.kv.delete(self.key)
        except Exception as e:
            raise PersistenceError(
                "Falha ao remover snapshot", details={"key": self.key, "error": str(e)}
            ) from e

        logger.info(f"Snapshot removido: {self.key}")
