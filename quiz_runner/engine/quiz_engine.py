"""Quiz Engine - Maquina de estados de uma sessão de quiz."""

from __future__ import annotations

import logging
from typing import Any

from ..models.enums import QuizPhase
from ..models.schemas import QuizDefinition, QuizQuestion, QuizSummary
from .scoring_engine import QuizScoringEngine

logger = logging.getLogger(__name__)

QuestionId = int | str


def _is_int(value: Any) -> bool:
    # bool é subclasse de int, mas nunca é um índice válido no snapshot
    return isinstance(value, int) and not isinstance(value, bool)


class QuizEngine:
    """Estado de uma sessão de quiz cronometrada.

    Guarda a posição atual, as respostas (id da questão -> índice escolhido),
    o tempo restante e a fase. A definição do quiz (título, questões, limites)
    é imutável e nunca faz parte do snapshot: ela é fornecida de novo pela
    fonte do quiz ao restaurar.

    O engine não conhece relogio. O host chama ``tick()`` uma vez por segundo;
    quando o tempo chega a zero o quiz é finalizado na mesma chamada.

    Depois de finalizado o estado que afeta a pontuação fica congelado:
    ``select()`` e ``tick()`` são ignorados. A navegação continua permitida
    para o modo revisão.

    Example:
        >>> engine = QuizEngine(quiz)
        >>> engine.select(1)
        >>> engine.next()
        >>> summary = engine.finish()
        >>> restored = QuizEngine.from_state(quiz, engine.to_state())
    """

    def __init__(
        self,
        quiz: QuizDefinition,
        scoring: QuizScoringEngine | None = None,
    ):
        self.quiz = quiz
        self.scoring = scoring or QuizScoringEngine()
        self.questions: tuple[QuizQuestion, ...] = tuple(quiz.questions)

        self._current_index = 0
        self._answers: dict[QuestionId, int] = {}
        self._remaining_sec = quiz.time_limit_sec
        self._phase = QuizPhase.IN_PROGRESS

    # =========================================================================
    # CONFIGURAÇÃO (imutável)
    # =========================================================================

    @property
    def title(self) -> str:
        return self.quiz.title

    @property
    def time_limit_sec(self) -> int:
        return self.quiz.time_limit_sec

    @property
    def pass_threshold(self) -> float:
        return self.quiz.pass_threshold

    # =========================================================================
    # LEITURA
    # =========================================================================

    @property
    def length(self) -> int:
        return len(self.questions)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> QuizQuestion | None:
        if not self.questions:
            return None
        return self.questions[self._current_index]

    @property
    def answers(self) -> dict[QuestionId, int]:
        """Copia das respostas registradas."""
        return dict(self._answers)

    @property
    def remaining_sec(self) -> int:
        return self._remaining_sec

    @property
    def phase(self) -> QuizPhase:
        return self._phase

    @property
    def is_finished(self) -> bool:
        return self._phase is QuizPhase.FINISHED

    @property
    def is_expired(self) -> bool:
        return self._remaining_sec <= 0

    def get_selected_index(self) -> int | None:
        """Índice escolhido na questão atual (None se sem resposta)."""
        question = self.current_question
        if question is None:
            return None
        return self._answers.get(question.id)

    def is_last(self) -> bool:
        return self._current_index == self.length - 1

    # =========================================================================
    # NAVEGAÇÃO
    # =========================================================================

    def go_to(self, index: int) -> bool:
        """Move para ``index`` se estiver em [0, length). Retorna se moveu."""
        if not 0 <= index < self.length:
            return False
        self._current_index = index
        return True

    def next(self) -> bool:
        if self._current_index < self.length - 1:
            self._current_index += 1
            return True
        return False

    def prev(self) -> bool:
        if self._current_index > 0:
            self._current_index -= 1
            return True
        return False

    # =========================================================================
    # RESPOSTAS E TEMPO
    # =========================================================================

    def select(self, option_index: int) -> bool:
        """Registra a alternativa escolhida na questão atual.

        Sobrescreve a resposta anterior. Índices fora do intervalo são aceitos
        e simplesmente nunca pontuam.

        Returns:
            True se a resposta foi registrada, False se o quiz já terminou
            ou não ha questões.
        """
        if self.is_finished:
            logger.debug("select() ignorado: quiz finalizado")
            return False

        question = self.current_question
        if question is None:
            return False

        self._answers[question.id] = option_index
        return True

    def tick(self) -> bool:
        """Consome um segundo do cronômetro.

        Returns:
            True se o tempo foi decrementado
        """
        if self.is_finished or self._remaining_sec <= 0:
            return False

        self._remaining_sec -= 1
        if self._remaining_sec <= 0:
            logger.info(f"Tempo esgotado em '{self.title}', finalizando")
            self.finish()
        return True

    # =========================================================================
    # FINALIZAÇÃO
    # =========================================================================

    def finish(self) -> QuizSummary:
        """Finaliza o quiz (idempotente) e retorna o resultado."""
        if not self.is_finished:
            self._phase = QuizPhase.FINISHED
            summary = self.get_summary()
            logger.info(
                f"Quiz '{self.title}' finalizado: {summary.correct}/{summary.total} "
                f"(passed={summary.passed})"
            )
            return summary

        return self.get_summary()

    def get_summary(self) -> QuizSummary:
        return self.scoring.calculate_summary(
            self.questions, self._answers, self.pass_threshold
        )

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    def to_state(self) -> dict[str, Any]:
        """Snapshot dos campos mutáveis (sem a definição do quiz)."""
        return {
            "current_index": self._current_index,
            "answers": dict(self._answers),
            "remaining_sec": self._remaining_sec,
            "is_finished": self.is_finished,
        }

    @classmethod
    def from_state(
        cls,
        quiz: QuizDefinition,
        state: Any,
        scoring: QuizScoringEngine | None = None,
    ) -> QuizEngine:
        """Restaura um engine a partir de um snapshot.

        Cada campo é validado de forma independente; campo ausente ou inválido
        volta ao valor padrão de um engine novo. Nunca levanta exceção.

        Args:
            quiz: Definição autoritativa do quiz
            state: Snapshot produzido por ``to_state()`` (possivelmente via JSON)
            scoring: Motor de pontuação (opcional)
        """
        engine = cls(quiz, scoring=scoring)

        if not isinstance(state, dict):
            logger.warning(f"Snapshot ignorado: esperado dict, recebido {type(state).__name__}")
            return engine

        current_index = state.get("current_index")
        if _is_int(current_index) and 0 <= current_index < engine.length:
            engine._current_index = current_index
        elif current_index is not None:
            logger.debug(f"current_index inválido no snapshot: {current_index!r}")

        answers = state.get("answers")
        if isinstance(answers, dict):
            engine._answers = engine._restore_answers(answers)
        elif answers is not None:
            logger.debug(f"answers inválido no snapshot: {type(answers).__name__}")

        remaining_sec = state.get("remaining_sec")
        if _is_int(remaining_sec):
            engine._remaining_sec = min(max(remaining_sec, 0), engine.time_limit_sec)
        elif remaining_sec is not None:
            logger.debug(f"remaining_sec inválido no snapshot: {remaining_sec!r}")

        is_finished = state.get("is_finished")
        if is_finished is True:
            engine._phase = QuizPhase.FINISHED
        elif is_finished is not None and not isinstance(is_finished, bool):
            logger.debug(f"is_finished inválido no snapshot: {is_finished!r}")

        return engine

    def _restore_answers(self, raw: dict[Any, Any]) -> dict[QuestionId, int]:
        # JSON converte chaves int em str: casar pelo str() do id
        ids_by_key = {str(q.id): q.id for q in self.questions}
        restored: dict[QuestionId, int] = {}

        for key, value in raw.items():
            question_id = ids_by_key.get(str(key))
            if question_id is None or not _is_int(value):
                logger.debug(f"Resposta descartada no snapshot: {key!r} -> {value!r}")
                continue
            restored[question_id] = value

        return restored
