"""
Lifespan FastAPI: vérifications au démarrage.
- Charge le catalogue des offres (un document de contenu invalide empêche le démarrage).
- Journalise la présence (jamais la valeur) des secrets Stripe.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from daniel_award import config
from daniel_award.offerings import get_catalog


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Les paiements restent servis sans secret configuré: chaque requête échoue alors
    proprement en 500 (ConfigurationError), le log ci-dessous aide l'exploitant.
    """
    logger = logging.getLogger("uvicorn.error")
    catalog = get_catalog()
    logger.info("Catalog loaded: %s tiers, individual seat $%s", len(catalog.tiers), catalog.individual.unit_price)

    status = config.describe()
    if not status["secret_key"]:
        logger.warning("STRIPE_SECRET_KEY missing: /api/payment and /api/webhook will answer 500")
    if not status["webhook_secret"]:
        logger.warning("STRIPE_WEBHOOK_SECRET missing: /api/webhook will answer 500")
    if not status["publishable_key"]:
        logger.warning("STRIPE_PUBLISHABLE_KEY missing: payment form cannot load in the browser")
    logger.info("Stripe configuration: %s", status)

    yield
