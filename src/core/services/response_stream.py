"""Stream de un único evento sobre asyncio.

Modelo:
- Al suscribirse se lanza una tarea productora: una llamada al transporte y,
  después, la clasificación/decodificación en un hilo (`asyncio.to_thread`).
- El desenlace pasa por un canal de una sola plaza (`asyncio.Queue(maxsize=1)`)
  que lee un único consumidor.
- El consumidor entrega el evento en el loop de entrega
  (`call_soon_threadsafe`); por defecto, el loop desde el que se suscribió.
- `Subscription.cancel()` aborta la tarea productora y suprime la emisión.
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class _Outcome(Generic[T]):
    value: T | None = None
    error: BaseException | None = None


class Subscription:
    """Interés activo en un `ResponseStream`."""

    def __init__(self) -> None:
        self._cancelled = False
        self._claimed = False
        self._tasks: list[asyncio.Task[Any]] = []
        self._finished: Future[None] = Future()
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._finished.done()

    def cancel(self) -> None:
        """Aborta la petición en curso; no se emitirá ningún evento.

        Sin efecto si la entrega ya empezó o terminó.
        """

        with self._lock:
            if self._cancelled or self._claimed or self._finished.done():
                return
            self._cancelled = True
        for task in self._tasks:
            task.cancel()
        self._finish()

    async def join(self) -> None:
        """Espera a que el evento se haya entregado o a la cancelación."""

        await asyncio.wrap_future(self._finished)

    def _attach(self, *tasks: asyncio.Task[Any]) -> None:
        self._tasks.extend(tasks)

    def _claim(self) -> bool:
        """Reserva la entrega del evento; False si ya se canceló."""

        with self._lock:
            if self._cancelled or self._claimed:
                return False
            self._claimed = True
            return True

    def _finish(self) -> None:
        with self._lock:
            if not self._finished.done():
                self._finished.set_result(None)


class ResponseStream(Generic[T]):
    """Publicador frío: cada `subscribe` ejecuta `fetch` una vez.

    `fetch` hace el I/O; `handle` transforma su resultado en el valor final
    o lanza el error estructurado.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        handle: Callable[[Any], T],
    ) -> None:
        self._fetch = fetch
        self._handle = handle

    def subscribe(
        self,
        on_value: Callable[[T], None],
        on_error: Callable[[BaseException], None],
        on_completion: Callable[[], None] | None = None,
        *,
        delivery_loop: asyncio.AbstractEventLoop | None = None,
    ) -> Subscription:
        """Activa el stream. Debe llamarse desde un event loop en ejecución.

        Éxito: `on_value(valor)` y luego `on_completion()`.
        Fallo: solo `on_error(error)`.
        """

        loop = asyncio.get_running_loop()
        target = delivery_loop or loop
        channel: asyncio.Queue[_Outcome[T]] = asyncio.Queue(maxsize=1)
        subscription = Subscription()

        producer = loop.create_task(self._produce(channel))
        consumer = loop.create_task(
            self._consume(channel, subscription, target, on_value, on_error, on_completion)
        )
        subscription._attach(producer, consumer)
        return subscription

    async def _produce(self, channel: asyncio.Queue[_Outcome[T]]) -> None:
        try:
            raw = await self._fetch()
            value = await asyncio.to_thread(self._handle, raw)
        except Exception as exc:
            await channel.put(_Outcome(error=exc))
        else:
            await channel.put(_Outcome(value=value))

    @staticmethod
    async def _consume(
        channel: asyncio.Queue[_Outcome[T]],
        subscription: Subscription,
        target: asyncio.AbstractEventLoop,
        on_value: Callable[[T], None],
        on_error: Callable[[BaseException], None],
        on_completion: Callable[[], None] | None,
    ) -> None:
        outcome = await channel.get()

        def deliver() -> None:
            if not subscription._claim():
                return
            try:
                if outcome.error is not None:
                    on_error(outcome.error)
                else:
                    on_value(outcome.value)  # type: ignore[arg-type]
                    if on_completion is not None:
                        on_completion()
            finally:
                subscription._finish()

        target.call_soon_threadsafe(deliver)
