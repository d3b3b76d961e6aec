"""Configuração de logging do pacote."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Instala um único StreamHandler no logger ``quiz_runner``.

    Chamadas repetidas apenas ajustam o nível.
    """
    logger = logging.getLogger("quiz_runner")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
