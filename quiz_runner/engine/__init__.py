"""Quiz Engines - Lógica de negocios."""

from .countdown import Countdown
from .quiz_engine import QuizEngine
from .scoring_engine import QuizScoringEngine

__all__ = ["QuizEngine", "QuizScoringEngine", "Countdown"]
