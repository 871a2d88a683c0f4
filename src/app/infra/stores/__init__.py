"""Stores — implementações concretas de armazenamento.

Módulos disponíveis:
    - memory_stores: sessões de agendamento em memória do processo
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryWorkflowStore

__all__ = ["MemoryWorkflowStore"]
