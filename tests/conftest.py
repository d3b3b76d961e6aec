# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza definições de quiz, stores e configurações comuns
# =============================================================================

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "ERROR",  # Reduzir logs em testes
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Remove handlers instalados por configure_logging entre testes."""
    import logging

    logger = logging.getLogger("quiz_runner")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(level)


# =============================================================================
# FIXTURES DO QUIZ
# =============================================================================


@pytest.fixture
def sample_quiz_data():
    """Quiz bruto no formato camelCase do questions.json."""
    return {
        "title": "Quiz de Teste",
        "timeLimitSec": 60,
        "passThreshold": 0.5,
        "questions": [
            {
                "id": "q1",
                "text": "Pergunta 1?",
                "options": ["A", "B", "C"],
                "correctIndex": 1,
                "topic": "Geral",
            },
            {
                "id": "q2",
                "text": "Pergunta 2?",
                "options": ["A", "B", "C"],
                "correctIndex": 0,
            },
            {
                "id": "q3",
                "text": "Pergunta 3?",
                "options": ["A", "B", "C"],
                "correctIndex": 2,
                "topic": "Detalhes",
            },
        ],
    }


@pytest.fixture
def sample_quiz(sample_quiz_data):
    """QuizDefinition com 3 questões (corretas: [1, 0, 2])."""
    from quiz_runner.models.schemas import QuizDefinition

    return QuizDefinition.model_validate(sample_quiz_data)


@pytest.fixture
def short_quiz(sample_quiz_data):
    """Mesmo quiz com apenas 3 segundos."""
    from quiz_runner.models.schemas import QuizDefinition

    return QuizDefinition.model_validate({**sample_quiz_data, "timeLimitSec": 3})


@pytest.fixture
def empty_quiz():
    """Quiz sem questões (construido direto, sem passar pelo loader)."""
    from quiz_runner.models.schemas import QuizDefinition

    return QuizDefinition(title="Vazio", time_limit_sec=10, pass_threshold=0.5, questions=[])


@pytest.fixture
def quiz_file(tmp_path, sample_quiz_data):
    """Arquivo JSON do quiz em disco."""
    import json

    path = tmp_path / "questions.json"
    path.write_text(json.dumps(sample_quiz_data), encoding="utf-8")
    return path


# =============================================================================
# FIXTURES DE ARMAZENAMENTO
# =============================================================================


@pytest.fixture
def memory_kv():
    from quiz_runner.storage.kv import MemoryKV

    return MemoryKV()


@pytest.fixture
def session_store(memory_kv):
    from quiz_runner.storage.session_store import SessionStore

    return SessionStore(memory_kv)


@pytest.fixture
def failing_kv():
    """KV cujas operações sempre falham com OSError."""
    mock = MagicMock()
    mock.get = AsyncMock(side_effect=OSError("disk error"))
    mock.set = AsyncMock(side_effect=OSError("disk full"))
    mock.delete = AsyncMock(side_effect=OSError("disk error"))
    return mock


@pytest.fixture
def broken_kv():
    """KV que falha com erro genérico (não OSError) em todas as operações."""
    mock = MagicMock()
    mock.get = AsyncMock(side_effect=RuntimeError("backend down"))
    mock.set = AsyncMock(side_effect=RuntimeError("backend down"))
    mock.delete = AsyncMock(side_effect=RuntimeError("backend down"))
    return mock


# =============================================================================
# FIXTURES DE LOGGING
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs para verificação em testes."""
    import logging

    caplog.set_level(logging.DEBUG, logger="quiz_runner")
    return caplog
