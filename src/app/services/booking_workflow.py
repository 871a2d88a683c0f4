"""Workflow de agendamento: IDENTITY → DETAILS → CONFIRMATION.

Orquestra a resolução de identidade, o cálculo de horários e o envio do
agendamento. É o único dono do BookingDraft; toda mudança de fase passa
pela FSM (fsm.BookingStateMachine) com o próprio workflow como contexto
dos guards.

Erros de servidor ficam expostos como ErrorDescriptor até o próximo
envio ou até `dismiss_error`. Falhas de validação local levantam
LocalValidationError e nunca chegam à rede.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from app.domain.booking import AppointmentConfirmation, BookingDraft
from app.domain.client import ExistingClient, NewClient, identity_client_number
from app.domain.errors import ErrorDescriptor
from app.observability import record_booking_outcome
from app.services.appointment_availability import (
    AvailabilityResolver,
    SlotRequestSequencer,
    reconcile_selected_time,
)
from app.services.client_identity import (
    CLIENT_NOT_FOUND_MESSAGE,
    ClientIdentityResolver,
    RegistrantForm,
    is_registrant_valid,
    registrant_errors,
)
from app.services.error_codes import CLIENT_NOT_FOUND, describe_for_display, parse_error_message
from app.services.formatting import format_time_for_display
from config.logging import log_interpreted_error
from fsm import BookingEvent, BookingState, create_booking_fsm
from utils.errors import BookingApiError, ClientNotFoundError, InvalidTransitionError, LocalValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.catalog import AppointmentType, Branch
    from app.protocols.booking_api import BookingApiProtocol
    from app.services.appointment_availability import SlotSource
    from app.services.verification_artifact import VerificationArtifactBuilder

logger = logging.getLogger(__name__)

_COMPONENT = "booking_workflow"

_MISSING_FIELD_MESSAGES = {
    "reason": "Seleccione el motivo de la cita",
    "branch": "Seleccione una sede",
    "date": "Seleccione una fecha",
    "time": "Seleccione un horario disponible",
}

_UNSET: Any = object()


class BookingWorkflow:
    """Máquina de agendamento de uma sessão (um rascunho, uma identidade)."""

    def __init__(
        self,
        api: BookingApiProtocol,
        artifact_builder: VerificationArtifactBuilder,
        *,
        booking_id: str | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._api = api
        self._identity_resolver = ClientIdentityResolver(api)
        self._availability = AvailabilityResolver(api)
        self._artifact_builder = artifact_builder
        self._booking_id = booking_id or uuid4().hex
        self._machine = create_booking_fsm(self._booking_id)
        self._sequencer = SlotRequestSequencer()
        self._today = today or date.today

        self._branches: tuple[Branch, ...] = ()
        self._reasons: tuple[AppointmentType, ...] = ()
        self._draft = BookingDraft()
        self._registrant_form = RegistrantForm()
        self._slots: tuple[str, ...] = ()
        self._slot_source: SlotSource | None = None
        self._error: ErrorDescriptor | None = None
        self._error_origin: str | None = None
        self._confirmation: AppointmentConfirmation | None = None
        self._loading_slots = False
        self._submitting = False

    # ------------------------------------------------------------------
    # Estado exposto
    # ------------------------------------------------------------------

    @property
    def booking_id(self) -> str:
        return self._booking_id

    @property
    def state(self) -> BookingState:
        return self._machine.current_state

    @property
    def draft(self) -> BookingDraft:
        return self._draft

    @property
    def slots(self) -> tuple[str, ...]:
        return self._slots

    @property
    def error(self) -> ErrorDescriptor | None:
        return self._error

    @property
    def confirmation(self) -> AppointmentConfirmation | None:
        return self._confirmation

    @property
    def branches(self) -> tuple[Branch, ...]:
        return self._branches

    @property
    def reasons(self) -> tuple[AppointmentType, ...]:
        return self._reasons

    @property
    def registrant_form(self) -> RegistrantForm:
        return self._registrant_form

    @property
    def is_loading_slots(self) -> bool:
        return self._loading_slots

    # Predicados consumidos pelos guards da FSM (TransitionContext)

    @property
    def has_identity(self) -> bool:
        return self._draft.identity is not None

    @property
    def registrant_valid(self) -> bool:
        identity = self._draft.identity
        if isinstance(identity, NewClient):
            return is_registrant_valid(identity.registrant)
        return True

    @property
    def missing_fields(self) -> tuple[str, ...]:
        return self._draft.missing_fields()

    @property
    def has_confirmation(self) -> bool:
        return self._confirmation is not None

    # ------------------------------------------------------------------
    # Início e fase IDENTITY
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Carrega sedes e motivos em paralelo e aplica os defaults.

        Default: sede principal (ou a primeira), primeiro motivo, amanhã.
        """
        try:
            branches, reasons = await asyncio.gather(
                self._api.list_branches(),
                self._api.list_appointment_types(),
            )
        except Exception as exc:
            self._set_error(_interpret_exception(exc), origin="catalogs", action="load_catalogs")
            return

        self._branches = tuple(branches)
        self._reasons = tuple(reasons)
        main_branch = next((b for b in self._branches if b.is_main), None)
        if main_branch is None and self._branches:
            main_branch = self._branches[0]
        self._draft = self._draft.with_changes(
            branch_id=main_branch.id if main_branch else None,
            reason_id=self._reasons[0].id if self._reasons else None,
            date=self._today() + timedelta(days=1),
        )
        logger.info(
            "booking_started",
            extra={
                "component": _COMPONENT,
                "action": "start",
                "result": "ok",
                "branch_count": len(self._branches),
                "reason_count": len(self._reasons),
            },
        )

    async def identify_existing(self, client_number: str) -> bool:
        """Caminho de cliente existente.

        Returns:
            True se avançou para DETAILS; False se o cliente não foi
            encontrado (erro CLIENT_NOT_FOUND exposto para oferecer o
            caminho de cliente novo).

        Raises:
            InvalidTransitionError: fora da fase IDENTITY.
            LocalValidationError: número vazio.
        """
        self._require_state(BookingState.IDENTITY, "identify_existing")
        try:
            identity = await self._identity_resolver.resolve_existing(client_number)
        except ClientNotFoundError as exc:
            descriptor = ErrorDescriptor(
                code=CLIENT_NOT_FOUND,
                message=exc.message or CLIENT_NOT_FOUND_MESSAGE,
                is_expected_validation=True,
            )
            self._set_error(descriptor, origin="identity", action="identify_existing")
            return False

        await self._enter_details(identity, BookingEvent.CLIENT_RESOLVED)
        return True

    def update_registrant(self, **changes: Any) -> bool:
        """Altera campos do formulário do registrante; retorna a validade agregada."""
        self._require_state(BookingState.IDENTITY, "update_registrant")
        self._registrant_form.update(**changes)
        return self._registrant_form.is_valid

    def blur_registrant_field(self, field: str) -> str | None:
        self._require_state(BookingState.IDENTITY, "blur_registrant_field")
        return self._registrant_form.blur(field)

    async def continue_as_new_client(self) -> None:
        """Caminho de cliente novo, escolhido explicitamente.

        Raises:
            InvalidTransitionError: fora da fase IDENTITY.
            LocalValidationError: formulário inválido.
        """
        self._require_state(BookingState.IDENTITY, "continue_as_new_client")
        identity = self._registrant_form.to_identity()
        await self._enter_details(identity, BookingEvent.REGISTRANT_ACCEPTED)

    async def _enter_details(
        self,
        identity: ExistingClient | NewClient,
        event: BookingEvent,
    ) -> None:
        previous_draft = self._draft
        self._draft = self._draft.with_changes(identity=identity)
        result = self._machine.fire(event, context=self, metadata={"identity_kind": identity.kind})
        if not result.success:
            self._draft = previous_draft
            raise InvalidTransitionError(result.error_reason)
        self._clear_error()
        logger.info(
            "booking_identity_resolved",
            extra={
                "component": _COMPONENT,
                "action": str(event),
                "result": "ok",
                "identity_kind": identity.kind,
            },
        )
        await self._refresh_slots()

    # ------------------------------------------------------------------
    # Fase DETAILS
    # ------------------------------------------------------------------

    async def update_details(
        self,
        *,
        reason_id: int | None = _UNSET,
        branch_id: int | None = _UNSET,
        day: date | None = _UNSET,
        time: str | None = _UNSET,
        observations: str | None = _UNSET,
    ) -> None:
        """Aplica alterações ao rascunho.

        Mudar data ou sede recalcula o SlotSet; um horário informado junto
        é aplicado depois do recálculo e precisa pertencer ao novo conjunto.

        Raises:
            InvalidTransitionError: fora da fase DETAILS.
            LocalValidationError: horário fora do SlotSet atual.
        """
        self._require_state(BookingState.DETAILS, "update_details")
        changes: dict[str, Any] = {}
        if reason_id is not _UNSET:
            changes["reason_id"] = reason_id
        if observations is not _UNSET:
            changes["observations"] = (observations or "").strip()
        slot_inputs_changed = False
        if branch_id is not _UNSET and branch_id != self._draft.branch_id:
            changes["branch_id"] = branch_id
            slot_inputs_changed = True
        if day is not _UNSET and day != self._draft.date:
            changes["date"] = day
            slot_inputs_changed = True
        if changes:
            self._draft = self._draft.with_changes(**changes)

        if slot_inputs_changed:
            await self._refresh_slots()

        if time is not _UNSET:
            self.select_time(time)

    async def select_branch(self, branch_id: int) -> None:
        await self.update_details(branch_id=branch_id)

    async def select_date(self, day: date) -> None:
        await self.update_details(day=day)

    def select_reason(self, reason_id: int) -> None:
        self._require_state(BookingState.DETAILS, "select_reason")
        self._draft = self._draft.with_changes(reason_id=reason_id)

    def select_time(self, time: str | None) -> None:
        self._require_state(BookingState.DETAILS, "select_time")
        self._ensure_slots_settled()
        if time and time not in self._slots:
            raise LocalValidationError({"time": "El horario seleccionado no está disponible"})
        self._draft = self._draft.with_changes(time=time or None)

    def _ensure_slots_settled(self) -> None:
        if self._loading_slots:
            raise LocalValidationError({"time": "Espere a que se carguen los horarios disponibles"})

    def set_observations(self, observations: str) -> None:
        self._require_state(BookingState.DETAILS, "set_observations")
        self._draft = self._draft.with_changes(observations=(observations or "").strip())

    async def refresh_slots(self) -> bool:
        """Recalcula o SlotSet para a data/sede atuais."""
        self._require_state(BookingState.DETAILS, "refresh_slots")
        return await self._refresh_slots()

    async def _refresh_slots(self) -> bool:
        """Recalcula horários com last-request-wins.

        Returns:
            True se o resultado foi aplicado; False se foi descartado por
            existir um recálculo mais novo.
        """
        day, branch_id = self._draft.date, self._draft.branch_id
        if day is None or branch_id is None:
            self._sequencer.invalidate()
            self._apply_slots((), None, None)
            return True

        token = self._sequencer.issue(day, branch_id)
        self._loading_slots = True
        self._slots = ()
        resolution = await self._availability.resolve(day, branch_id)

        if not self._sequencer.is_current(token):
            logger.debug(
                "stale_slot_resolution_discarded",
                extra={"component": _COMPONENT, "action": "refresh_slots", "result": "discarded"},
            )
            return False

        self._loading_slots = False
        self._apply_slots(resolution.slots, resolution.source, resolution.error)
        return True

    def _apply_slots(
        self,
        slots: tuple[str, ...],
        source: SlotSource | None,
        error: ErrorDescriptor | None,
    ) -> None:
        self._slots = slots
        self._slot_source = source
        selected = reconcile_selected_time(self._draft.time, slots)
        if selected != self._draft.time:
            self._draft = self._draft.with_changes(time=selected)
        if error is not None:
            self._set_error(error, origin="availability", action="resolve_slots")
        elif self._error_origin == "availability":
            self._clear_error()

    async def submit(self) -> bool:
        """Envia o agendamento pelo endpoint adequado ao tipo de identidade.

        Returns:
            True se a cita foi confirmada (fase CONFIRMATION); False se o
            servidor rejeitou (erro interpretado exposto, fase DETAILS).

        Raises:
            InvalidTransitionError: fora da fase DETAILS ou envio em curso.
            LocalValidationError: rascunho incompleto, horários ainda em carga
                ou registrante inválido.
        """
        self._require_state(BookingState.DETAILS, "submit")
        if self._submitting:
            raise InvalidTransitionError("Ya hay un agendamiento en curso")
        self._ensure_slots_settled()

        missing = self._draft.missing_fields()
        if missing:
            raise LocalValidationError({name: _MISSING_FIELD_MESSAGES[name] for name in missing})
        identity = self._draft.identity
        if identity is None:
            raise InvalidTransitionError("Identidad del cliente no resuelta")
        if isinstance(identity, NewClient) and not is_registrant_valid(identity.registrant):
            raise LocalValidationError(registrant_errors(identity.registrant))

        self._clear_error()
        draft_snapshot = self._draft
        self._submitting = True
        try:
            receipt = await self._schedule(identity, draft_snapshot)
        except Exception as exc:
            descriptor = _interpret_exception(exc)
            self._set_error(descriptor, origin="schedule", action="schedule")
            self._machine.fire(
                BookingEvent.SCHEDULE_FAILED,
                context=self,
                metadata={"error_code": descriptor.code},
            )
            record_booking_outcome(
                "rejected" if descriptor.is_expected_validation else "failed",
                identity.kind,
                descriptor.code,
            )
            return False
        finally:
            self._submitting = False

        artifact_client = identity_client_number(identity)
        client_reference = (
            identity.client_number if isinstance(identity, ExistingClient) else receipt.ticket_number
        )
        self._confirmation = AppointmentConfirmation(
            ticket_number=receipt.ticket_number,
            identity=identity,
            draft=draft_snapshot,
            client_reference=client_reference,
            appointment_date=receipt.appointment_date or draft_snapshot.date.isoformat(),
            appointment_time=receipt.appointment_time or draft_snapshot.time or "",
            status=receipt.status,
            message=receipt.message,
            artifact=self._artifact_builder.build(receipt.ticket_number, artifact_client),
        )
        result = self._machine.fire(
            BookingEvent.SCHEDULE_SUCCEEDED,
            context=self,
            metadata={"identity_kind": identity.kind},
        )
        if not result.success:
            self._confirmation = None
            raise InvalidTransitionError(result.error_reason)

        record_booking_outcome("confirmed", identity.kind)
        logger.info(
            "booking_confirmed",
            extra={
                "component": _COMPONENT,
                "action": "submit",
                "result": "ok",
                "identity_kind": identity.kind,
                "artifact_attached": self._confirmation.artifact is not None,
            },
        )
        return True

    async def _schedule(self, identity: ExistingClient | NewClient, draft: BookingDraft):
        # missing_fields() vazio garante reason/branch/date/time preenchidos
        if isinstance(identity, ExistingClient):
            return await self._api.schedule_for_client(
                client_number=identity.client_number,
                branch_id=draft.branch_id,
                appointment_type_id=draft.reason_id,
                day=draft.date,
                time=draft.time,
                observations=draft.observations or None,
            )
        return await self._api.schedule_with_registration(
            registrant=identity.registrant,
            branch_id=draft.branch_id,
            appointment_type_id=draft.reason_id,
            day=draft.date,
            time=draft.time,
            observations=draft.observations or None,
        )

    # ------------------------------------------------------------------
    # Erros e reset
    # ------------------------------------------------------------------

    def dismiss_error(self) -> None:
        self._clear_error()

    def reset(self) -> None:
        """Nova solicitação: volta a IDENTITY com rascunho, artefato e erro limpos.

        Catálogos já carregados são mantidos.
        """
        self._machine.fire(BookingEvent.NEW_REQUEST)
        self._sequencer.invalidate()
        self._draft = BookingDraft()
        self._registrant_form = RegistrantForm()
        self._slots = ()
        self._slot_source = None
        self._confirmation = None
        self._loading_slots = False
        self._clear_error()
        logger.info(
            "booking_reset",
            extra={"component": _COMPONENT, "action": "reset", "result": "ok"},
        )

    def snapshot(self) -> dict[str, Any]:
        """Visão serializável para a camada de apresentação."""
        return {
            "booking_id": self._booking_id,
            "state": str(self.state),
            "draft": self._draft.to_dict(),
            "registrant": {
                "is_valid": self._registrant_form.is_valid,
                "errors": self._registrant_form.errors,
            },
            "branches": [b.model_dump() for b in self._branches],
            "reasons": [r.model_dump() for r in self._reasons],
            "slots": [
                {"value": slot, "label": format_time_for_display(slot)} for slot in self._slots
            ],
            "slot_source": self._slot_source,
            "loading_slots": self._loading_slots,
            "error": describe_for_display(self._error) if self._error else None,
            "confirmation": self._confirmation.to_dict() if self._confirmation else None,
        }

    def _set_error(self, descriptor: ErrorDescriptor, *, origin: str, action: str) -> None:
        self._error = descriptor
        self._error_origin = origin
        log_interpreted_error(logger, _COMPONENT, action, descriptor)

    def _clear_error(self) -> None:
        self._error = None
        self._error_origin = None

    def _require_state(self, expected: BookingState, operation: str) -> None:
        if self.state != expected:
            raise InvalidTransitionError(
                f"Operación {operation} no permitida en la fase {self.state.name}"
            )


def _interpret_exception(exc: Exception) -> ErrorDescriptor:
    if isinstance(exc, BookingApiError):
        return parse_error_message(exc.message)
    logger.exception(
        "booking_unexpected_exception",
        extra={"component": _COMPONENT, "result": "error", "error_type": type(exc).__name__},
    )
    return parse_error_message(None)


__all__ = ["BookingWorkflow"]
