"""Quiz Runner Server - App FastAPI com uma sessão de quiz cronometrada."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import QuizRunnerConfig, get_config
from .loader.quiz_source import load_quiz
from .logging_config import configure_logging
from .router import router as quiz_router
from .session import QuizSession
from .storage.kv import JsonFileKV, KVBackend
from .storage.session_store import SessionStore

logger = logging.getLogger(__name__)


def create_app(config: QuizRunnerConfig | None = None, kv: KVBackend | None = None) -> FastAPI:
    """Cria a app FastAPI.

    O lifespan carrega o quiz (``LoadError`` aborta a inicialização),
    restaura/cria a sessão e para o cronômetro ao desligar.

    Args:
        config: Configuração (padrão: variáveis de ambiente)
        kv: Backend KV (padrão: JsonFileKV em ``config.storage_dir``)
    """
    config = config or get_config()
    configure_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        quiz = await load_quiz(config.quiz_source, timeout=config.load_timeout)
        store = SessionStore(kv or JsonFileKV(config.storage_dir), key=config.storage_key)

        session = QuizSession(quiz, store, tick_interval=config.tick_interval)
        await session.start()
        app.state.quiz_session = session
        logger.info(f"Quiz Runner pronto: '{quiz.title}'")

        yield

        await session.shutdown()
        app.state.quiz_session = None
        logger.info("Quiz Runner encerrado")

    app = FastAPI(
        title="Quiz Runner",
        description="Quiz de múltipla escolha cronometrado com progresso persistente",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health_check():
        session = getattr(app.state, "quiz_session", None)
        return {
            "status": "healthy",
            "session_active": session is not None,
            "config": config.to_dict(),
        }

    app.include_router(quiz_router)
    return app


def main() -> None:
    import uvicorn

    uvicorn.run(create_app(), host="127.0.0.1", port=8001)


if __name__ == "__main__":
    main()
