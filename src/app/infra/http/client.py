"""Cliente HTTP JSON compartilhado pela integração com a API de citas."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.observability import get_correlation_id, record_latency
from utils.errors import BookingApiError

logger = logging.getLogger(__name__)

_COMPONENT = "http_client"
_ERROR_BODY_FIELDS = ("error", "detail", "message", "title")


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str
    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(
        default_factory=lambda: {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
    )
    verify_ssl: bool = True


class HttpClient:
    """Wrapper de um `httpx.AsyncClient` que devolve JSON ou levanta BookingApiError.

    Sem retries: uma falha é reportada uma única vez ao chamador.
    """

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            headers=config.default_headers,
            verify=config.verify_ssl,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: dict[str, Any]) -> Any:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Executa a requisição e decodifica o corpo.

        Raises:
            BookingApiError: status >= 400 (mensagem extraída do corpo),
                falha de rede (status None) ou JSON inválido.
        """
        correlation_id = get_correlation_id()
        headers = {"X-Correlation-ID": correlation_id} if correlation_id else None
        started_at = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "http_transport_error",
                extra={
                    "component": _COMPONENT,
                    "action": f"{method} {path}",
                    "result": "error",
                    "error_type": type(exc).__name__,
                },
            )
            raise BookingApiError("Error de conexión con el servidor") from exc
        finally:
            record_latency(
                _COMPONENT,
                method,
                (time.perf_counter() - started_at) * 1000,
                correlation_id or None,
            )

        if response.is_error:
            message = extract_error_message(response)
            logger.info(
                "http_error_status",
                extra={
                    "component": _COMPONENT,
                    "action": f"{method} {path}",
                    "result": "error",
                    "status_code": response.status_code,
                },
            )
            raise BookingApiError(message, status_code=response.status_code)

        return _decode_body(response)


def extract_error_message(response: httpx.Response) -> str:
    """Mensagem do servidor: error/detail/message/title, texto puro ou status."""
    fallback = f"HTTP error! status: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text or fallback
    if isinstance(body, dict):
        for key in _ERROR_BODY_FIELDS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
        return fallback
    if isinstance(body, str) and body:
        return body
    return fallback


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" not in content_type:
        return response.text
    try:
        return response.json()
    except ValueError as exc:
        raise BookingApiError(
            "Respuesta inválida del servidor",
            status_code=response.status_code,
        ) from exc
