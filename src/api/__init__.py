"""API: camada de borda HTTP.

Responsabilidades:
- Receber requests dos clientes e webhooks do Stripe
- Validar assinaturas, cabeçalhos e payloads
- Converter payloads externos em modelos internos
- Mapear erros de domínio para respostas HTTP

Subpastas:
- connectors/: adapters de entrada por provedor externo (Stripe)
- routes/: endpoints HTTP (bookings, providers, webhook, health)

NÃO PODE conter: FSM, regras de negócio de bookings, acesso direto a stores.
"""
