"""Identidade do cidadão no fluxo de agendamento.

`ClientIdentity` é uma união discriminada: ou o cliente já existe no
registro (número de cliente), ou é um registrante novo (dados pessoais).
Nunca os dois, nunca nenhum.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentType(StrEnum):
    """Tipos de documento aceitos no registro simplificado."""

    CC = "CC"
    TI = "TI"
    CE = "CE"
    RC = "RC"
    NIT = "NIT"


class ClientRecord(BaseModel):
    """Cliente já registrado, como devolvido pela validação."""

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int | None = Field(default=None, description="Identificador interno.")
    client_number: str = Field(..., description="Número de cliente.")
    document_type: str = Field(default="", description="Tipo de documento.")
    document_number: str = Field(default="", description="Número de documento.")
    full_name: str = Field(default="", description="Nome completo.")
    email: str | None = Field(default=None, description="Email de contato.")
    phone: str | None = Field(default=None, description="Telefone fixo.")
    mobile: str | None = Field(default=None, description="Celular.")
    address: str | None = Field(default=None, description="Endereço.")
    is_active: bool = Field(default=True, description="Cliente ativo.")


class RegistrantData(BaseModel):
    """Dados pessoais de quem agenda pela primeira vez.

    Alterado campo a campo via `model_copy(update=...)`; a validação
    fica em `app.services.client_identity`.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    document_type: DocumentType = Field(default=DocumentType.CC, description="Tipo de documento.")
    document_number: str = Field(default="", description="Número de documento (1-15 dígitos).")
    full_name: str = Field(default="", description="Nome completo (3-200 caracteres).")
    mobile: str = Field(default="", description="Celular com 10 dígitos.")
    email: str = Field(default="", description="Email de contato.")
    phone: str = Field(default="", description="Telefone fixo (opcional).")
    address: str = Field(default="", description="Endereço (opcional).")


class ExistingClient(BaseModel):
    """Identidade resolvida pelo registro de clientes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["existing"] = "existing"
    client_number: str = Field(..., min_length=1, description="Número de cliente validado.")
    record: ClientRecord | None = Field(default=None, description="Registro devolvido.")


class NewClient(BaseModel):
    """Identidade de um registrante novo (registro + cita numa só chamada)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["new"] = "new"
    registrant: RegistrantData = Field(..., description="Dados do registrante.")


ClientIdentity = Annotated[ExistingClient | NewClient, Field(discriminator="kind")]


def identity_client_number(identity: ExistingClient | NewClient) -> str:
    """Número usado para referenciar o cliente em artefatos e consultas.

    No caminho novo o servidor ainda não devolveu número de cliente, então
    usamos o número de documento do registrante.
    """
    if isinstance(identity, ExistingClient):
        return identity.client_number
    return identity.registrant.document_number


__all__ = [
    "ClientIdentity",
    "ClientRecord",
    "DocumentType",
    "ExistingClient",
    "NewClient",
    "RegistrantData",
    "identity_client_number",
]
