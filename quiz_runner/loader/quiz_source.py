"""Quiz Source - Carrega e valida a definição do quiz (URL ou arquivo)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from ..exceptions import LoadError
from ..models.schemas import QuizDefinition

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def _fetch(url: str, timeout: float) -> Any:
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url)
    except httpx.HTTPError as e:
        raise LoadError(f"Fonte do quiz inacessível: {e}", details={"source": url}) from e

    if not response.is_success:
        raise LoadError(
            f"HTTP {response.status_code}",
            details={"source": url, "status_code": response.status_code},
        )

    try:
        return response.json()
    except json.JSONDecodeError as e:
        raise LoadError("Resposta não é JSON válido", details={"source": url}) from e


def _read_file(path: Path) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(f"Arquivo do quiz ilegível: {e}", details={"source": str(path)}) from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise LoadError("Arquivo do quiz não é JSON válido", details={"source": str(path)}) from e


def parse_quiz(data: Any, source: str = "<memory>") -> QuizDefinition:
    """Valida dados brutos e constroi a definição do quiz.

    Além do schema pydantic, exige ao menos uma questão, ids únicos e
    ``correct_index`` dentro de ``options``.

    Raises:
        LoadError: Se os dados forem inválidos
    """
    if not isinstance(data, dict):
        raise LoadError("Dados do quiz devem ser um objeto", details={"source": source})

    try:
        quiz = QuizDefinition.model_validate(data)
    except ValidationError as e:
        raise LoadError(
            "Dados do quiz inválidos",
            details={"source": source, "errors": e.errors(include_url=False)},
        ) from e

    if not quiz.questions:
        raise LoadError("Quiz sem questões", details={"source": source})

    seen: set[str] = set()
    for position, question in enumerate(quiz.questions):
        key = str(question.id)
        if key in seen:
            raise LoadError(
                f"ID de questão duplicado: {question.id!r}",
                details={"source": source, "position": position},
            )
        seen.add(key)

        if not 0 <= question.correct_index < len(question.options):
            raise LoadError(
                f"correct_index fora do intervalo na questão {question.id!r}",
                details={
                    "source": source,
                    "correct_index": question.correct_index,
                    "options": len(question.options),
                },
            )

    return quiz


async def load_quiz(source: str, timeout: float = DEFAULT_TIMEOUT) -> QuizDefinition:
    """Carrega a definição do quiz de uma URL http(s) ou de um arquivo local.

    Args:
        source: URL ou caminho do JSON do quiz
        timeout: Timeout HTTP em segundos

    Returns:
        QuizDefinition validada

    Raises:
        LoadError: Fonte inacessível, status de erro ou dados inválidos
    """
    if _is_url(source):
        data = await _fetch(source, timeout)
    else:
        data = _read_file(Path(source))

    quiz = parse_quiz(data, source=source)
    logger.info(f"Quiz carregado de {source}: '{quiz.title}' ({len(quiz.questions)} questões)")
    return quiz
