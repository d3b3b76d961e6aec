"""Configuração centralizada do quiz_runner (variáveis de ambiente)."""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} inválido, usando {default}")
        return default
    if value <= 0:
        logger.warning(f"{name}={raw!r} deve ser positivo, usando {default}")
        return default
    return value


@dataclass
class QuizRunnerConfig:
    """Configuração do runner.

    Attributes:
        quiz_source: URL http(s) ou caminho do JSON do quiz
        storage_dir: Diretório do KV em disco
        storage_key: Chave versionada do snapshot
        tick_interval: Segundos entre ticks do cronômetro
        load_timeout: Timeout HTTP da fonte do quiz
        log_level: Nível de log do pacote
    """

    quiz_source: str = "./data/questions.json"
    storage_dir: Path = Path(".quiz_state")
    storage_key: str = "quiz.state.v1"
    tick_interval: float = 1.0
    load_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> QuizRunnerConfig:
        defaults = cls()
        return cls(
            quiz_source=os.getenv("QUIZ_SOURCE") or defaults.quiz_source,
            storage_dir=Path(os.getenv("QUIZ_STORAGE_DIR") or defaults.storage_dir),
            storage_key=os.getenv("QUIZ_STORAGE_KEY") or defaults.storage_key,
            tick_interval=_env_float("QUIZ_TICK_INTERVAL", defaults.tick_interval),
            load_timeout=_env_float("QUIZ_LOAD_TIMEOUT", defaults.load_timeout),
            log_level=(os.getenv("LOG_LEVEL") or defaults.log_level).upper(),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["storage_dir"] = str(self.storage_dir)
        return data


_config: QuizRunnerConfig | None = None


def get_config() -> QuizRunnerConfig:
    """Retorna a configuração singleton (carregada do ambiente na 1a chamada)."""
    global _config
    if _config is None:
        load_dotenv()
        _config = QuizRunnerConfig.from_env()
    return _config


def reload_config() -> QuizRunnerConfig:
    """Recarrega .env e variáveis de ambiente."""
    global _config
    load_dotenv(override=True)
    _config = QuizRunnerConfig.from_env()
    return _config
