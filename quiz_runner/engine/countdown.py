"""Countdown - Task asyncio que dispara um callback a cada intervalo."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class Countdown:
    """Cronômetro periódico sobre o event loop.

    Chama ``on_tick`` a cada ``interval`` segundos até ``stop()``. O callback
    roda até o fim antes do próximo tick (modelo cooperativo, sem threads).

    Os ticks seguem prazos fixos (``início + n * interval``), então o tempo
    gasto no callback não atrasa os ticks seguintes. Exceções do callback são
    logadas e o cronômetro continua.

    ``stop()`` é idempotente e pode ser chamado de dentro do próprio
    callback (ex: auto-finalização): nesse caso a task não é cancelada no meio
    do callback, apenas encerra o loop ao retornar.
    """

    def __init__(self, on_tick: Callable[[], Awaitable[None]], interval: float = 1.0):
        self.on_tick = on_tick
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Inicia (ou reinicia) o cronômetro."""
        self.stop()
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug(f"Countdown iniciado (interval={self.interval}s)")

    def stop(self) -> bool:
        """Para o cronômetro. Retorna False se já estava parado."""
        task, self._task = self._task, None
        if task is None or task.done():
            return False

        if task is not asyncio.current_task():
            task.cancel()
        logger.debug("Countdown parado")
        return True

    async def _run(self) -> None:
        task = asyncio.current_task()
        loop = asyncio.get_running_loop()
        deadline = loop.time()

        while self._task is task:
            deadline += self.interval
            await asyncio.sleep(max(deadline - loop.time(), 0))
            if self._task is not task:
                break

            try:
                await self.on_tick()
            except Exception:
                logger.exception("Erro no callback do countdown")
