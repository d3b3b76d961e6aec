"""Quiz Session - Controlador que possui engine, cronômetro e armazenamento."""

from __future__ import annotations

import logging

from .engine.countdown import Countdown
from .engine.quiz_engine import QuizEngine
from .exceptions import PersistenceError
from .models.schemas import QuizDefinition, QuizSummary, SessionView
from .storage.session_store import SessionStore
from .view import build_view

logger = logging.getLogger(__name__)


class QuizSession:
    """Sessão de quiz de um host.

    Único dono do QuizEngine, do Countdown e do SessionStore. Handlers de
    apresentação recebem a sessão por referência e nunca guardam o engine,
    que é substituído a cada ``restart()``.

    Toda mutação efetiva é persistida imediatamente (write-through). Falhas
    de persistência são logadas e ignoradas: a sessão continua em memória.

    Example:
        >>> session = QuizSession(quiz, SessionStore(JsonFileKV(".quiz_state")))
        >>> await session.start()
        >>> await session.select(2)
        >>> await session.next()
        >>> summary = await session.finish()
        >>> await session.shutdown()
    """

    def __init__(
        self,
        quiz: QuizDefinition,
        store: SessionStore,
        tick_interval: float = 1.0,
    ):
        self.quiz = quiz
        self.store = store
        self.engine = QuizEngine(quiz)
        self.countdown = Countdown(self._on_tick, interval=tick_interval)
        self.review_mode = False

    # =========================================================================
    # CICLO DE VIDA
    # =========================================================================

    async def start(self) -> None:
        """Restaura o snapshot salvo (se houver) e inicia o cronômetro."""
        snapshot = await self._load_snapshot()
        if snapshot is not None:
            self.engine = QuizEngine.from_state(self.quiz, snapshot)
            logger.info(
                f"Sessão restaurada: questão {self.engine.current_index + 1}, "
                f"{self.engine.remaining_sec}s restantes, finished={self.engine.is_finished}"
            )
        else:
            self.engine = QuizEngine(self.quiz)
            logger.info(f"Nova sessão: '{self.quiz.title}' ({self.engine.time_limit_sec}s)")

        # tempo esgotado enquanto a sessão estava fechada
        if self.engine.is_expired and not self.engine.is_finished:
            self.engine.finish()
            await self.persist()

        if not self.engine.is_finished:
            self.countdown.start()

    async def shutdown(self) -> None:
        """Para o cronômetro e grava o estado final. Idempotente."""
        self.countdown.stop()
        await self.persist()

    async def restart(self) -> None:
        """Descarta o snapshot e recomeça do zero."""
        self.countdown.stop()
        try:
            await self.store.clear()
        except PersistenceError as e:
            logger.warning(f"Não foi possível limpar o snapshot: {e.message}")

        self.engine = QuizEngine(self.quiz)
        self.review_mode = False
        logger.info("Sessão reiniciada")

        await self.persist()
        self.countdown.start()

    # =========================================================================
    # AÇÕES DO USUÁRIO
    # =========================================================================

    async def prev(self) -> bool:
        return await self._after(self.engine.prev())

    async def next(self) -> bool:
        return await self._after(self.engine.next())

    async def go_to(self, index: int) -> bool:
        return await self._after(self.engine.go_to(index))

    async def select(self, option_index: int) -> bool:
        return await self._after(self.engine.select(option_index))

    async def finish(self) -> QuizSummary:
        summary = self.engine.finish()
        self.countdown.stop()
        await self.persist()
        return summary

    def enter_review(self) -> bool:
        """Ativa o modo revisão (somente apresentação, após finalizar)."""
        if not self.engine.is_finished:
            return False
        self.review_mode = True
        return True

    def view(self) -> SessionView:
        return build_view(self.engine, review_mode=self.review_mode)

    # =========================================================================
    # INTERNOS
    # =========================================================================

    async def _on_tick(self) -> None:
        if not self.engine.tick():
            return

        await self.persist()
        if self.engine.is_finished:
            self.countdown.stop()

    async def _after(self, changed: bool) -> bool:
        if changed:
            await self.persist()
        return changed

    async def persist(self) -> None:
        try:
            await self.store.save(self.engine.to_state())
        except PersistenceError as e:
            logger.warning(f"Não foi possível salvar o estado: {e.message} {e.details}")

    async def _load_snapshot(self) -> dict | None:
        try:
            return await self.store.load()
        except PersistenceError as e:
            logger.warning(f"Snapshot ignorado: {e.message} {e.details}")
            return None
