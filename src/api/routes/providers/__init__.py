"""Rotas de providers (slots e disponibilidade)."""
