"""Exceções do quiz_runner."""

from typing import Any


class QuizRunnerError(Exception):
    """Erro base do quiz_runner.

    Args:
        message: Mensagem legível do erro
        details: Contexto adicional (serializável em JSON)
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class LoadError(QuizRunnerError):
    """Fonte do quiz inacessível, com status de erro ou com dados inválidos.

    Fatal para o início da sessão: nenhum QuizEngine é criado.
    """


class PersistenceError(QuizRunnerError):
    """Falha de leitura/escrita no armazenamento de sessão.

    Recuperada localmente pela sessão (log + continua em memória).
    """
