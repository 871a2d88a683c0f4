"""Endpoints das sessões de agendamento.

Cada sessão guarda um BookingWorkflow no store do processo. As rotas só
traduzem HTTP ↔ workflow; regras e validações vivem no núcleo.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.routes.booking.schemas import (
    DetailsUpdateRequest,
    ExistingIdentityRequest,
    RegistrantUpdateRequest,
)
from app.bootstrap.dependencies import create_booking_workflow
from app.observability import reset_booking_id, set_booking_id
from app.protocols.workflow_store import WorkflowStoreProtocol
from app.services.booking_workflow import BookingWorkflow
from config.settings import get_booking_session_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _store(request: Request) -> WorkflowStoreProtocol:
    return request.app.state.workflow_store


async def get_workflow(session_id: str, request: Request) -> BookingWorkflow:
    """Carrega o workflow da sessão e fixa o booking_id no contexto de log.

    O contexto é copiado por request; não há reset explícito.
    """
    workflow = _store(request).load(session_id)
    if workflow is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sesión no encontrada")
    set_booking_id(workflow.booking_id)
    return workflow


Workflow = Annotated[BookingWorkflow, Depends(get_workflow)]


def _touch(request: Request, workflow: BookingWorkflow) -> None:
    # Renova o TTL a cada interação
    ttl = get_booking_session_settings().ttl_seconds
    _store(request).save(workflow.booking_id, workflow, ttl_seconds=ttl)


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def start_session(request: Request) -> dict[str, Any]:
    """Abre uma solicitação: carrega catálogos e aplica defaults."""
    workflow = create_booking_workflow(
        request.app.state.booking_api,
        request.app.state.artifact_builder,
    )
    token = set_booking_id(workflow.booking_id)
    try:
        await workflow.start()
        _touch(request, workflow)
        logger.info(
            "booking_session_created",
            extra={"component": "booking_routes", "action": "start", "result": "ok"},
        )
        return {"session_id": workflow.booking_id, **workflow.snapshot()}
    finally:
        reset_booking_id(token)


@router.get("/sessions/{session_id}")
async def get_session(workflow: Workflow) -> dict[str, Any]:
    return workflow.snapshot()


@router.post("/sessions/{session_id}/identity/existing")
async def identify_existing(
    body: ExistingIdentityRequest,
    workflow: Workflow,
    request: Request,
) -> dict[str, Any]:
    """Caminho de cliente existente; `resolved=false` com CLIENT_NOT_FOUND."""
    resolved = await workflow.identify_existing(body.client_number)
    _touch(request, workflow)
    return {"resolved": resolved, **workflow.snapshot()}


@router.patch("/sessions/{session_id}/registrant")
async def update_registrant(
    body: RegistrantUpdateRequest,
    workflow: Workflow,
    request: Request,
) -> dict[str, Any]:
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    workflow.update_registrant(**changes)
    for field in changes:
        workflow.blur_registrant_field(field)
    _touch(request, workflow)
    form = workflow.registrant_form
    return {"is_valid": form.is_valid, "errors": form.errors}


@router.post("/sessions/{session_id}/identity/new")
async def continue_as_new_client(workflow: Workflow, request: Request) -> dict[str, Any]:
    await workflow.continue_as_new_client()
    _touch(request, workflow)
    return workflow.snapshot()


@router.patch("/sessions/{session_id}/details")
async def update_details(
    body: DetailsUpdateRequest,
    workflow: Workflow,
    request: Request,
) -> dict[str, Any]:
    changes = body.model_dump(exclude_unset=True)
    if "date" in changes:
        changes["day"] = changes.pop("date")
    await workflow.update_details(**changes)
    _touch(request, workflow)
    return workflow.snapshot()


@router.post("/sessions/{session_id}/submit")
async def submit(workflow: Workflow, request: Request) -> dict[str, Any]:
    """Envia o agendamento; rejeições do servidor ficam em `error` (fase DETAILS)."""
    confirmed = await workflow.submit()
    _touch(request, workflow)
    return {"confirmed": confirmed, **workflow.snapshot()}


@router.post("/sessions/{session_id}/reset")
async def reset(workflow: Workflow, request: Request) -> dict[str, Any]:
    workflow.reset()
    _touch(request, workflow)
    return workflow.snapshot()


@router.delete("/sessions/{session_id}/error")
async def dismiss_error(workflow: Workflow, request: Request) -> dict[str, Any]:
    workflow.dismiss_error()
    _touch(request, workflow)
    return workflow.snapshot()
