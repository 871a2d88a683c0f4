"""App — coração do sistema: workflow de agendamento, serviços e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos do domínio (identidade, rascunho, citas, catálogos)
- services/: serviços de aplicação (workflow, disponibilidade, gestão)
- infra/: implementações concretas de IO (HTTP, API de citas, stores)
- protocols/: contratos/interfaces
- observability/: correlation/booking ids e métricas via logs

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
