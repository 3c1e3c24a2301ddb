"""Pipeline de peticiones HTTP.

Flujo por llamada:
    descriptor -> `build_request` -> transporte inyectado -> clasificación de
    estado -> decodificación (o mapeo a error estructurado) -> llamante.

Dos formas de llamada con el mismo manejo de respuesta:
- `request`: corrutina, un único resultado.
- `stream`: `ResponseStream` que emite un único evento terminal.

Cada llamada produce exactamente un desenlace: un valor decodificado o un
error. Nada se reintenta ni se silencia.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from adapters.encoding import build_url_with_query, form_encode, json_encode, pretty_json
from adapters.json_decoder import JsonDecoder, new_json_decoder
from core.domain.errors import (
    DEFAULT_ERROR_MESSAGE,
    DecodeError,
    InvalidURLError,
    NoInternetError,
    NoResponseError,
    ServerError,
)
from core.domain.models import (
    BodyType,
    EmptyResponse,
    ErrorResponse,
    Headers,
    HttpMethod,
    Params,
    RequestDescriptor,
    ResponseExpectation,
)
from core.interfaces.transport import HttpTransport
from core.services.response_stream import ResponseStream

T = TypeVar("T")

logger = logging.getLogger(__name__)

# 200..298 inclusive
SUCCESS_STATUS = range(200, 299)


@dataclass
class _CallTrace:
    """Log detallado de una llamada. Sin efecto si `enabled` es False."""

    channel: str
    enabled: bool
    request_id: str = field(default_factory=lambda: str(random.randrange(100)))
    started: float = field(default_factory=time.perf_counter)

    def restart(self) -> None:
        self.started = time.perf_counter()

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started) * 1000)

    def log(self, tag: str, detail: object | None = None, *, level: int = logging.INFO) -> None:
        if not self.enabled:
            return
        suffix = "" if detail is None else f": [{detail}]"
        logger.log(level, "[API][%s] [id: %s] [%s]%s", self.channel, self.request_id, tag, suffix)

    def log_request(self, descriptor: RequestDescriptor) -> None:
        self.log("URL", descriptor.url)
        self.log("PARAMETERS", descriptor.params)
        self.log("HEADER ITEMS", descriptor.headers)

    def log_cancel(self) -> None:
        self.log("CANCEL][TIME", f"{self.elapsed_ms()}ms", level=logging.ERROR)


class NetworkController:
    """Fachada sobre un transporte HTTP inyectado.

    Sin estado salvo el flag `debug`; cada llamada construye su propia
    petición, así que una instancia se puede compartir entre tareas.
    """

    def __init__(self, transport: HttpTransport, *, debug: bool = False) -> None:
        self._transport = transport
        self._debug = debug

    @classmethod
    def print_changes(cls, transport: HttpTransport) -> "NetworkController":
        """Instancia con log detallado para todas sus llamadas."""

        return cls(transport, debug=True)

    @property
    def debug(self) -> bool:
        return self._debug

    #  Construcción

    def build_request(self, descriptor: RequestDescriptor) -> httpx.Request:
        """Construye la `httpx.Request` de un descriptor.

        Lanza `InvalidURLError` sin URL, antes de cualquier I/O.
        """

        if not descriptor.url:
            raise InvalidURLError()
        try:
            url = httpx.URL(descriptor.url)
        except httpx.InvalidURL:
            raise InvalidURLError() from None

        headers = httpx.Headers({"Content-Type": "application/json"})
        content: bytes | None = None

        if descriptor.body_type is BodyType.IN_QUERY:
            url = build_url_with_query(url, descriptor.params)
        elif descriptor.params is not None:
            if descriptor.must_encode_params:
                content = form_encode(descriptor.params)
            else:
                content = json_encode(descriptor.params)

        for key, value in descriptor.headers.items():
            if isinstance(value, str):
                headers[key] = value
            else:
                logger.warning("Dropping non-string header %r (%s)", key, type(value).__name__)

        build = getattr(self._transport, "build_request", None)
        if callable(build):
            # httpx.AsyncClient: aplica sus cabeceras por defecto (User-Agent, Accept).
            return build(descriptor.method.value, url, headers=headers, content=content)
        return httpx.Request(descriptor.method.value, url, headers=headers, content=content)

    #  Async

    async def request(
        self,
        method: HttpMethod,
        url: str | httpx.URL | None,
        *,
        response_type: type[T] | Any = Any,
        decoder: JsonDecoder | None = None,
        headers: Headers | None = None,
        params: Params | None = None,
        must_encode_params: bool = False,
        body_type: BodyType = BodyType.IN_BODY,
        expect: ResponseExpectation = ResponseExpectation.BODY,
    ) -> T:
        """Envía una petición y devuelve el cuerpo decodificado como `response_type`.

        Errores: `InvalidURLError`, `NoResponseError`, `DecodeError`,
        `ServerError`, `NoInternetError`; cualquier otro fallo del transporte
        se propaga sin reclasificar.
        """

        descriptor = RequestDescriptor(
            method=method,
            url=None if url is None else str(url),
            headers=headers or {},
            params=params,
            must_encode_params=must_encode_params,
            body_type=body_type,
        )
        trace = _CallTrace("ASYNC", self._debug)
        trace.log_request(descriptor)

        try:
            request = self.build_request(descriptor)
        except InvalidURLError:
            trace.log("RESPONSE ERROR", "invalidURL", level=logging.ERROR)
            raise

        response = await self._send(request, trace)
        return self._handle_response(
            response,
            response_type=response_type,
            decoder=decoder or new_json_decoder(),
            expect=expect,
            trace=trace,
        )

    #  Stream

    def stream(
        self,
        method: HttpMethod,
        url: str | httpx.URL | None,
        *,
        response_type: type[T] | Any = Any,
        decoder: JsonDecoder | None = None,
        headers: Headers | None = None,
        params: Params | None = None,
        expect: ResponseExpectation = ResponseExpectation.BODY,
    ) -> ResponseStream[T]:
        """Stream frío: cada suscripción hace una petición (parámetros JSON en el cuerpo)."""

        descriptor = RequestDescriptor(
            method=method,
            url=None if url is None else str(url),
            headers=headers or {},
            params=params,
        )
        decoder = decoder or new_json_decoder()

        # Una traza por suscripción: id y tiempos propios.
        async def fetch() -> tuple[_CallTrace, httpx.Response | None]:
            trace = _CallTrace("STREAM", self._debug)
            trace.log_request(descriptor)
            try:
                request = self.build_request(descriptor)
            except InvalidURLError:
                trace.log("RESPONSE ERROR", "invalidURL", level=logging.ERROR)
                raise
            try:
                return trace, await self._send(request, trace)
            except asyncio.CancelledError:
                trace.log_cancel()
                raise

        def handle(fetched: tuple[_CallTrace, httpx.Response | None]) -> T:
            trace, response = fetched
            return self._handle_response(
                response,
                response_type=response_type,
                decoder=decoder,
                expect=expect,
                trace=trace,
            )

        return ResponseStream(fetch, handle)

    #  Internos

    async def _send(self, request: httpx.Request, trace: _CallTrace) -> httpx.Response | None:
        trace.restart()
        trace.log("SUBSCRIPTION")
        try:
            response = await self._transport.send(request)
        except httpx.ConnectError:
            trace.log_cancel()
            trace.log("NO INTERNET CONNECTION", level=logging.ERROR)
            raise NoInternetError() from None
        except Exception as exc:
            trace.log_cancel()
            trace.log("ERROR", repr(exc), level=logging.ERROR)
            raise

        trace.log("COMPLETION][TIME", f"{trace.elapsed_ms()}ms")
        if isinstance(response, httpx.Response):
            trace.log("OUTPUT", pretty_json(response.content))
        return response

    def _handle_response(
        self,
        response: httpx.Response | None,
        *,
        response_type: Any,
        decoder: JsonDecoder,
        expect: ResponseExpectation,
        trace: _CallTrace,
    ) -> Any:
        if not isinstance(response, httpx.Response):
            trace.log("RESPONSE ERROR", "noResponse", level=logging.ERROR)
            raise NoResponseError()

        try:
            if response.status_code in SUCCESS_STATUS:
                if expect is ResponseExpectation.EMPTY:
                    trace.log("PARSER", "EmptyResponse")
                    return EmptyResponse()
                value = decoder.decode(response_type, response.content)
                trace.log("PARSER", "OK")
                return value

            envelope = decoder.decode(ErrorResponse, response.content)
            trace.log("ERROR RESPONSE", envelope, level=logging.WARNING)
            raise ServerError(envelope.error_message or DEFAULT_ERROR_MESSAGE)
        except ValidationError as exc:
            trace.log_cancel()
            for error in exc.errors():
                trace.log(
                    f"DECODING-ERROR] [{error['type']}",
                    f"{error['msg']} -- CodingPath: {list(error['loc'])}",
                    level=logging.ERROR,
                )
            raise DecodeError() from None
