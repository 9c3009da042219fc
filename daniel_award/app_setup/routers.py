"""
Registre central des routers (API paiements, health).
"""
from fastapi import FastAPI

from daniel_award.health.router import router as health_router
from daniel_award.payments import views as payments_views


def register_routers(app: FastAPI) -> None:
    """
    Agrège les routers de l'application.
    - L'ordre n'a pas d'impact sauf conflits de chemins (évités par préfixes).
    """
    # API (/api/payment, /api/webhook)
    app.include_router(payments_views.router)
    # Health & monitoring
    app.include_router(health_router)
