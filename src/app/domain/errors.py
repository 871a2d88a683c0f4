"""Descritor uniforme de erros exibidos ao cidadão."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ErrorDescriptor(BaseModel):
    """Erro interpretado a partir da convenção `CODIGO|mensagem`.

    `is_expected_validation` separa regras de negócio esperadas
    (feriado, domingo, sem capacidade...) de falhas inesperadas que
    merecem diagnóstico.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Código da regra violada ou UNKNOWN_ERROR.")
    message: str = Field(..., description="Mensagem para o cidadão.")
    is_expected_validation: bool = Field(
        default=False,
        description="True para o conjunto fechado de códigos de negócio.",
    )


__all__ = ["ErrorDescriptor"]
