"""Endpoints de gestão de citas já emitidas (cidadão e agente)."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, ConfigDict, Field

from api.routes.errors import error_response
from app.services.appointment_management import AppointmentManager, ManagementOutcome

logger = logging.getLogger(__name__)

router = APIRouter()


class CancelRequest(BaseModel):
    """Cancelamento solicitado pelo cidadão."""

    model_config = ConfigDict(extra="ignore")

    client_number: str = Field(..., description="Número do cliente dono da cita.")
    reason: str = Field(default="", description="Motivo (10 a 500 caracteres).")
    force: bool = Field(
        default=False,
        description="Ignora a checagem local de antecedência; o servidor decide.",
    )


class CompleteRequest(BaseModel):
    """Conclusão registrada pelo agente."""

    model_config = ConfigDict(extra="ignore")

    notes: str = Field(default="", description="Notas de atendimento (10 a 1000 caracteres).")


def get_manager(request: Request) -> AppointmentManager:
    return request.app.state.appointment_manager


Manager = Annotated[AppointmentManager, Depends(get_manager)]


def _outcome_response(outcome: ManagementOutcome) -> Any:
    if outcome.success:
        return {"success": True, "message": outcome.message}
    return error_response(outcome.error)


@router.get("/client/{client_number}")
async def client_appointments(client_number: str, manager: Manager) -> dict[str, Any]:
    grouped = await manager.lookup(client_number)
    return {**grouped.to_dict(), "lead_time_hours": manager.lead_time_hours}


@router.get("/verify")
async def verify_appointment(
    manager: Manager,
    number: Annotated[str, Query(min_length=1)],
    client: Annotated[str, Query(min_length=1)],
) -> dict[str, Any]:
    """Verificação pública por referência (destino do QR)."""
    result = await manager.verify(number, client)
    return result.model_dump()


@router.get("/{appointment_number}")
async def get_appointment(
    appointment_number: str,
    manager: Manager,
    client: Annotated[str, Query(min_length=1)],
) -> dict[str, Any]:
    record = await manager.query(appointment_number, client)
    return record.model_dump()


@router.post("/{appointment_id}/cancel")
async def cancel_appointment(
    appointment_id: int,
    body: CancelRequest,
    manager: Manager,
) -> Any:
    """Cancela; dentro da janela de antecedência responde 409 sem chamar o servidor."""
    if body.force:
        outcome = await manager.force_cancel(body.client_number, appointment_id, body.reason)
        return _outcome_response(outcome)

    outcome = await manager.cancel_by_id(body.client_number, appointment_id, body.reason)
    if outcome is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cita no encontrada")
    return _outcome_response(outcome)


@router.post("/{appointment_id}/complete")
async def complete_appointment(
    appointment_id: int,
    body: CompleteRequest,
    manager: Manager,
) -> Any:
    outcome = await manager.complete(appointment_id, body.notes)
    return _outcome_response(outcome)
