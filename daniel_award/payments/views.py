import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool

from daniel_award.errors import InvalidPayloadError
from daniel_award.payments import service as payments_service
from daniel_award.payments.models import PaymentRequest

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Payments API"])


# module daniel_award.payments.views
@router.post("/payment")
async def create_payment(request: Request):
    """
    Crée un PaymentIntent Stripe pour l'inscription en cours.
    - Entrée JSON: {amount, tier, firstName, lastName, email, phone, org, seats, guests}
    - Sortie: 200 {clientSecret, intentId}
    - Erreurs (via gestionnaires d'exceptions): 400 {error} validation / refus Stripe,
      500 {error} configuration ou Stripe indisponible
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidPayloadError()
    if not isinstance(body, dict):
        raise InvalidPayloadError()
    try:
        order = PaymentRequest.model_validate(body)
    except PydanticValidationError:
        raise InvalidPayloadError()

    # Service synchrone (SDK Stripe bloquant): exécuté hors de la boucle événementielle
    result = await run_in_threadpool(payments_service.create_intent, order)
    return JSONResponse(result)


@router.post("/webhook", include_in_schema=False)
async def stripe_webhook(request: Request):
    """
    Webhook Stripe: vérifie la signature (Stripe-Signature) puis consomme payment_intent.succeeded.
    - Réponses: 200 {"received": true}; 400 {error} signature invalide; 500 {error} non configuré
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature") or ""
    return JSONResponse(payments_service.handle_webhook(payload, signature))
