"""Connectors: adapters de borda para provedores externos.

Estrutura:
- stripe/: verificação de assinatura e extração de metadados do checkout
"""

__all__: list[str] = []
