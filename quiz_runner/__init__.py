"""Quiz Runner - Quiz de múltipla escolha cronometrado e retomável.

Arquitetura:
- models/: Enums e Schemas Pydantic
- engine/: QuizEngine (maquina de estados), QuizScoringEngine, Countdown
- loader/: Fonte da definição do quiz (URL ou arquivo)
- storage/: SessionStore sobre backends KV (memória, arquivo JSON)
- session.py: QuizSession (dono do engine, cronômetro e store)
- view.py / router.py / app.py: apresentação via FastAPI
"""

from .engine import Countdown, QuizEngine, QuizScoringEngine
from .exceptions import LoadError, PersistenceError, QuizRunnerError
from .models import QuizDefinition, QuizPhase, QuizQuestion, QuizSummary
from .session import QuizSession
from .storage import JsonFileKV, MemoryKV, SessionStore

__all__ = [
    # Models
    "QuizPhase",
    "QuizQuestion",
    "QuizDefinition",
    "QuizSummary",
    # Engines
    "QuizEngine",
    "QuizScoringEngine",
    "Countdown",
    # Storage
    "SessionStore",
    "MemoryKV",
    "JsonFileKV",
    # Session
    "QuizSession",
    # Errors
    "QuizRunnerError",
    "LoadError",
    "PersistenceError",
]
