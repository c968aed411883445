"""Rotas de bookings."""
