"""Quiz Router - Endpoints FastAPI da camada de apresentação."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from .models.schemas import IntentResponse, SelectRequest, SessionView
from .session import QuizSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz", tags=["Quiz"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================


def get_session(request: Request) -> QuizSession:
    """Dependency: sessão única pertencente a app."""
    session = getattr(request.app.state, "quiz_session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Sessão de quiz não iniciada")
    return session


def _respond(session: QuizSession, moved: bool) -> IntentResponse:
    return IntentResponse(moved=moved, session=session.view())


# =============================================================================
# LEITURA
# =============================================================================


@router.get("/session", response_model=SessionView)
async def get_session_view(session: QuizSession = Depends(get_session)):
    """Estado renderizável da sessão atual."""
    return session.view()


# =============================================================================
# AÇÕES
# =============================================================================


@router.post("/prev", response_model=IntentResponse)
async def prev_question(session: QuizSession = Depends(get_session)):
    return _respond(session, await session.prev())


@router.post("/next", response_model=IntentResponse)
async def next_question(session: QuizSession = Depends(get_session)):
    return _respond(session, await session.next())


@router.post("/goto/{index}", response_model=IntentResponse)
async def go_to_question(index: int, session: QuizSession = Depends(get_session)):
    """Vai para a questão ``index`` (base 0). Fora do intervalo: moved=false."""
    return _respond(session, await session.go_to(index))


@router.post("/select", response_model=IntentResponse)
async def select_option(request: SelectRequest, session: QuizSession = Depends(get_session)):
    """Marca uma alternativa na questão atual.

    Ignorado (moved=false) depois que o quiz foi finalizado.
    """
    return _respond(session, await session.select(request.option_index))


@router.post("/finish", response_model=IntentResponse)
async def finish_quiz(session: QuizSession = Depends(get_session)):
    """Finaliza o quiz. Chamadas repetidas retornam o mesmo resultado."""
    already_finished = session.engine.is_finished
    summary = await session.finish()
    if not already_finished:
        logger.info(f"Quiz finalizado pelo usuário: {summary.correct}/{summary.total}")
    return _respond(session, not already_finished)


@router.post("/review", response_model=IntentResponse)
async def enter_review(session: QuizSession = Depends(get_session)):
    """Ativa anotações de correção. Antes de finalizar: moved=false."""
    return _respond(session, session.enter_review())


@router.post("/restart", response_model=IntentResponse)
async def restart_quiz(session: QuizSession = Depends(get_session)):
    """Descarta o progresso salvo e recomeça."""
    await session.restart()
    return _respond(session, True)
