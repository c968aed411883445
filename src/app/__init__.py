"""App: núcleo do serviço (casos de uso, domínio e infraestrutura).

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos e erros de domínio
- use_cases/: casos de uso (bookings, disponibilidade, pagamentos)
- services/: serviços puros (aritmética de horário, slots, conflitos)
- infra/: implementações concretas de IO
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas

Padrão: app executa; api adapta; fsm governa.
"""
