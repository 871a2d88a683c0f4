"""Catálogos servidos pela API de citas (sedes, motivos, horários, settings).

São somente leitura para o núcleo: ids funcionam como chaves estrangeiras
opacas. Campos chegam em camelCase e são aceitos pelo alias.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    extra="ignore",
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class Branch(BaseModel):
    """Sede física onde a cita é atendida."""

    model_config = _WIRE_CONFIG

    id: int = Field(..., description="Identificador da sede.")
    name: str = Field(..., description="Nome de exibição da sede.")
    code: str = Field(default="", description="Código interno da sede.")
    address: str = Field(default="", description="Endereço da sede.")
    city: str = Field(default="", description="Cidade da sede.")
    is_main: bool = Field(default=False, description="Sede principal (default do fluxo).")
    is_active: bool = Field(default=True, description="Sede ativa.")


class AppointmentType(BaseModel):
    """Motivo (tipo de cita) escolhido pelo cidadão."""

    model_config = _WIRE_CONFIG

    id: int = Field(..., description="Identificador do motivo.")
    name: str = Field(..., description="Nome de exibição do motivo.")
    code: str = Field(default="", description="Código interno do motivo.")
    description: str | None = Field(default=None, description="Descrição opcional.")
    icon: str | None = Field(default=None, description="Ícone de exibição.")
    estimated_time_minutes: int = Field(default=0, ge=0, description="Duração estimada.")
    is_active: bool = Field(default=True, description="Motivo ativo.")


class ConfiguredSlot(BaseModel):
    """Horário configurado para uma sede, independente da data."""

    model_config = _WIRE_CONFIG

    id: int | None = Field(default=None, description="Identificador do horário.")
    time: str = Field(..., description="Horário do slot (HH:MM).")
    branch_id: int | None = Field(default=None, description="Sede do slot.")
    is_active: bool = Field(default=False, description="Slot habilitado para reservas.")


class SystemSetting(BaseModel):
    """Parâmetro numérico/textual administrado no servidor."""

    model_config = _WIRE_CONFIG

    setting_key: str = Field(..., description="Chave do parâmetro.")
    setting_value: str = Field(default="", description="Valor bruto (string).")
    setting_type: str = Field(default="String", description="Tipo declarado do valor.")
    is_active: bool = Field(default=True, description="Parâmetro ativo.")


__all__ = ["AppointmentType", "Branch", "ConfiguredSlot", "SystemSetting"]
