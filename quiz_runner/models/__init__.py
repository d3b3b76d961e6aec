"""Quiz Models - Enums e Schemas."""

from .enums import OptionMark, QuizPhase
from .schemas import (
    IntentResponse,
    NavState,
    OptionView,
    QuestionView,
    QuizDefinition,
    QuizQuestion,
    QuizSummary,
    ResultView,
    SelectRequest,
    SessionView,
)

__all__ = [
    # Enums
    "QuizPhase",
    "OptionMark",
    # Definição
    "QuizQuestion",
    "QuizDefinition",
    "QuizSummary",
    # Apresentação
    "SelectRequest",
    "OptionView",
    "QuestionView",
    "NavState",
    "ResultView",
    "SessionView",
    "IntentResponse",
]
