"""Agregador de rotas: registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.bookings.router import router as bookings_router
from api.routes.health.router import router as health_router
from api.routes.payments.checkout import router as checkout_router
from api.routes.payments.webhook import router as stripe_webhook_router
from api.routes.providers.router import router as providers_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(
        stripe_webhook_router,
        prefix="/webhook/stripe",
        tags=["payments"],
    )
    api_router.include_router(checkout_router, prefix="/checkout", tags=["payments"])
    api_router.include_router(bookings_router, prefix="/bookings", tags=["bookings"])
    api_router.include_router(providers_router, prefix="/providers", tags=["providers"])

    return api_router
