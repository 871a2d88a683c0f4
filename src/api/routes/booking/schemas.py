"""Schemas de request das rotas de agendamento."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

from app.domain.client import DocumentType


class ExistingIdentityRequest(BaseModel):
    """Identificação de cliente já registrado."""

    model_config = ConfigDict(extra="ignore")

    client_number: str = Field(default="", description="Número de cliente.")


class RegistrantUpdateRequest(BaseModel):
    """Alteração parcial do formulário do registrante.

    Campos enviados são aplicados e marcados como tocados (blur).
    """

    model_config = ConfigDict(extra="forbid")

    document_type: DocumentType | None = None
    document_number: str | None = None
    full_name: str | None = None
    mobile: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class DetailsUpdateRequest(BaseModel):
    """Alteração parcial do rascunho na fase DETAILS."""

    model_config = ConfigDict(extra="forbid")

    reason_id: int | None = None
    branch_id: int | None = None
    date: dt.date | None = None
    time: str | None = None
    observations: str | None = Field(default=None, max_length=1000)


__all__ = [
    "DetailsUpdateRequest",
    "ExistingIdentityRequest",
    "RegistrantUpdateRequest",
]
