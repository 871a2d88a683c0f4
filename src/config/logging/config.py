"""Configuração centralizada de logging.

Logging estruturado JSON com campos obrigatórios (correlation_id,
service, level, logger, message) e helpers para os dois desvios que o
núcleo registra: fallback aplicado e erro inesperado.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="agendamiento_citas")
    logger = get_logger(__name__)
    logger.info("booking_submitted", extra={"component": "booking_workflow"})

Logs nunca carregam PII (nomes, documentos, emails, telefones).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.errors import ErrorDescriptor

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "agendamiento_citas"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    booking_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Deve ser chamada uma vez na inicialização (app/bootstrap/).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id do
            contexto atual (ContextVar de app/observability).
        booking_id_getter: Função que retorna o id da solicitação de
            agendamento do contexto atual.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter, booking_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo (service e correlation_id via filter)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um caminho degradado foi usado (sem PII).

    Ex.: disponibilidade derivada do catálogo, QR omitido, setting de
    antecedência ilegível.

    Args:
        logger: Logger do módulo chamador.
        component: Nome do componente (ex: "availability_resolver").
        reason: Motivo curto do fallback (ex: "primary_query_failed").
        elapsed_ms: Tempo decorrido em ms, quando aplicável.
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms

    logger.info(
        "Fallback applied for %s",
        component,
        extra=extra,
    )


def log_interpreted_error(
    logger: logging.Logger,
    component: str,
    action: str,
    descriptor: ErrorDescriptor,
) -> None:
    """Registra um erro já interpretado com a severidade correta.

    Erros de validação esperados são desfechos normais (INFO); qualquer
    outro código é sinalizado para diagnóstico (WARNING). A mensagem
    livre do servidor não é logada.

    Args:
        logger: Logger do módulo chamador.
        component: Nome do componente.
        action: Operação que falhou (ex: "schedule").
        descriptor: Erro interpretado.
    """
    extra = {
        "component": component,
        "action": action,
        "error_code": descriptor.code,
        "expected_validation": descriptor.is_expected_validation,
    }
    if descriptor.is_expected_validation:
        logger.info("business_rule_rejected", extra={**extra, "result": "rejected"})
        return
    logger.warning("unexpected_error", extra={**extra, "result": "error"})
