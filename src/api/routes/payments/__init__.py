"""Rotas de pagamento: checkout e webhooks do Stripe."""
