"""Factories — criação de implementações concretas a partir dos settings.

Este módulo centraliza o wiring entre protocolos e infraestrutura;
nenhum serviço do núcleo lê variáveis de ambiente diretamente.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.booking_api import BookingApiClient
from app.infra.http import HttpClient, HttpClientConfig
from app.infra.stores import MemoryWorkflowStore
from app.services.appointment_management import AppointmentManager
from app.services.booking_workflow import BookingWorkflow
from app.services.cancellation_policy import CancellationPolicyGuard, read_lead_time_hours
from app.services.verification_artifact import VerificationArtifactBuilder
from config.settings import get_booking_api_settings, get_booking_session_settings

if TYPE_CHECKING:
    from app.protocols.booking_api import BookingApiProtocol
    from app.protocols.workflow_store import WorkflowStoreProtocol
    from config.settings import BookingApiSettings

logger = logging.getLogger(__name__)


def create_http_client(settings: BookingApiSettings | None = None) -> HttpClient:
    """Cria o cliente HTTP apontando para a API de citas."""
    settings = settings or get_booking_api_settings()
    client = HttpClient(
        HttpClientConfig(
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
        )
    )
    logger.info("http_client_created", extra={"component": "bootstrap"})
    return client


def create_booking_api(http_client: HttpClient) -> BookingApiProtocol:
    return BookingApiClient(http_client)


def create_artifact_builder(settings: BookingApiSettings | None = None) -> VerificationArtifactBuilder:
    settings = settings or get_booking_api_settings()
    return VerificationArtifactBuilder(settings.verification_base_url, width=settings.qr_width)


def create_workflow_store() -> WorkflowStoreProtocol:
    """Cria store de sessões de agendamento (memória do processo)."""
    session_settings = get_booking_session_settings()
    store = MemoryWorkflowStore(max_sessions=session_settings.max_sessions)
    logger.info("workflow_store_created", extra={"backend": "memory"})
    return store


def create_booking_workflow(
    api: BookingApiProtocol,
    artifact_builder: VerificationArtifactBuilder | None = None,
) -> BookingWorkflow:
    return BookingWorkflow(api, artifact_builder or create_artifact_builder())


async def create_appointment_manager(
    api: BookingApiProtocol,
    settings: BookingApiSettings | None = None,
) -> AppointmentManager:
    """Lê a antecedência de cancelamento uma vez e monta o AppointmentManager."""
    settings = settings or get_booking_api_settings()
    lead_time_hours = await read_lead_time_hours(
        api,
        settings.cancellation_setting_key,
        default=settings.default_cancellation_hours,
    )
    logger.info(
        "appointment_manager_created",
        extra={"component": "bootstrap", "lead_time_hours": lead_time_hours},
    )
    return AppointmentManager(api, CancellationPolicyGuard(lead_time_hours))
