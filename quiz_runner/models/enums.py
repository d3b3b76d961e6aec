"""Quiz Enums - Fases da sessão e anotações de revisão."""

from enum import Enum


class QuizPhase(str, Enum):
    """Fase da sessão. Transição única: IN_PROGRESS -> FINISHED."""

    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class OptionMark(str, Enum):
    """Anotação de uma alternativa no modo revisão."""

    NONE = "none"
    CORRECT = "correct"  # alternativa correta
    INCORRECT = "incorrect"  # escolhida pelo usuário e errada
