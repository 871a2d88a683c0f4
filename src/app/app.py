"""Entrypoint da aplicação de agendamento de citas.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from api.routes.errors import register_exception_handlers
from app.bootstrap import SERVICE_NAME, initialize_app, validate_runtime_settings
from app.bootstrap.dependencies import (
    create_appointment_manager,
    create_artifact_builder,
    create_booking_api,
    create_http_client,
    create_workflow_store,
)
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import Response

    from app.protocols.booking_api import BookingApiProtocol
    from app.protocols.workflow_store import WorkflowStoreProtocol
    from app.services.verification_artifact import VerificationArtifactBuilder

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Propaga/gera correlation_id por request e o devolve no header."""
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        correlation_id = get_correlation_id()
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
    finally:
        reset_correlation_id(token)


def create_app(
    *,
    booking_api: BookingApiProtocol | None = None,
    workflow_store: WorkflowStoreProtocol | None = None,
    artifact_builder: VerificationArtifactBuilder | None = None,
) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        booking_api: Implementação da API de citas (default: cliente HTTP
            criado no startup e fechado no shutdown).
        workflow_store: Store de sessões (default: memória).
        artifact_builder: Gerador do QR de verificação.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("app_starting", extra={"service": SERVICE_NAME})
        validate_runtime_settings()

        http_client = None
        api = booking_api
        if api is None:
            http_client = create_http_client()
            api = create_booking_api(http_client)

        app.state.booking_api = api
        app.state.workflow_store = workflow_store or create_workflow_store()
        app.state.artifact_builder = artifact_builder or create_artifact_builder()
        app.state.appointment_manager = await create_appointment_manager(api)

        yield

        logger.info("app_shutting_down", extra={"service": SERVICE_NAME})
        if http_client is not None:
            await http_client.aclose()

    fastapi_app = FastAPI(
        title="Agendamiento de Citas",
        description="Núcleo de agendamento de citas para cidadãos",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    fastapi_app.middleware("http")(correlation_middleware)
    register_exception_handlers(fastapi_app)

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": SERVICE_NAME})
    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("starting_development_server", extra={"service": SERVICE_NAME})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
