"""
Adaptateur Stripe: centralise la configuration du SDK et les appels sortants.
- Timeout borné (config.STRIPE_TIMEOUT_SECONDS), aucun retry automatique:
  un échec remonte à l'appelant (l'assistant relance la création => nouvel intent).
- Les exceptions du SDK sont converties en erreurs typées (daniel_award.errors).
"""
import json
import logging
from typing import Any, Dict, Optional, Union

import stripe

from daniel_award import config
from daniel_award.errors import ConfigurationError, ProcessorUnavailableError, UpstreamError

logger = logging.getLogger(__name__)

_configured_timeout: Optional[int] = None


# module daniel_award.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Lève ConfigurationError (500) si STRIPE_SECRET_KEY est absente, avant tout appel réseau.
    - Installe un client HTTP avec timeout borné (une seule fois par valeur de timeout).
    """
    global _configured_timeout
    if not config.STRIPE_SECRET_KEY:
        raise ConfigurationError()
    stripe.api_key = config.STRIPE_SECRET_KEY
    stripe.max_network_retries = 0
    if _configured_timeout != config.STRIPE_TIMEOUT_SECONDS:
        stripe.default_http_client = stripe.RequestsClient(timeout=config.STRIPE_TIMEOUT_SECONDS)
        _configured_timeout = config.STRIPE_TIMEOUT_SECONDS
    return stripe


def create_payment_intent(
    *,
    amount: int,
    currency: str,
    description: str,
    receipt_email: str,
    metadata: Dict[str, str],
) -> Dict[str, Any]:
    """
    Crée un PaymentIntent Stripe.
    - amount: montant en unités mineures (cents)
    - automatic_payment_methods activé (Payment Element côté navigateur)
    Retour: dict intent (ex: {"id": "pi_...", "client_secret": "pi_..._secret_..."}).
    Erreurs:
    - UpstreamError (400) si Stripe refuse la requête (message Stripe transmis tel quel)
    - ProcessorUnavailableError (500) si Stripe est injoignable ou en erreur
    """
    require_stripe()
    try:
        intent = stripe.PaymentIntent.create(
            amount=amount,
            currency=currency,
            automatic_payment_methods={"enabled": True},
            description=description,
            receipt_email=receipt_email,
            metadata=metadata,
        )
    except (stripe.CardError, stripe.InvalidRequestError) as e:
        logger.info("payments.stripe rejected code=%s", getattr(e, "code", None))
        raise UpstreamError(getattr(e, "user_message", None) or str(e)) from e
    except stripe.StripeError as e:
        logger.exception("payments.stripe unavailable")
        raise ProcessorUnavailableError() from e
    return as_dict(intent)


def as_dict(obj: Any) -> Dict[str, Any]:
    """
    Convertit un objet retourné par le SDK en dict récursif.
    Les StripeObject récents ne sont plus des dict: passer par to_dict().
    """
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


def construct_event(payload: Union[bytes, str]) -> Dict[str, Any]:
    """
    Construit l'événement Stripe à partir d'un corps de webhook déjà authentifié
    (cf. signature.verify_signature).
    - Lève ValueError si le corps n'est pas du JSON ou pas un objet.
    Retour: dict event (ex: {"id": "evt_...", "type": "...", "data": {"object": {...}}}).
    """
    require_stripe()
    values = json.loads(payload)
    if not isinstance(values, dict):
        raise ValueError("webhook payload is not an event object")
    event = stripe.Event.construct_from(values, stripe.api_key)
    return as_dict(event)
