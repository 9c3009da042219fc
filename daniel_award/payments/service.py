"""
Cas d'usage 'payments': création du PaymentIntent et traitement des webhooks Stripe.
Orchestre validation, métadonnées, client Stripe et vérification de signature.
Aucune persistance: la seule trace durable d'un paiement confirmé est la ligne
de log du sink de confirmation.
"""
import logging
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Optional

from daniel_award import config
from daniel_award.errors import (
    AmountMismatchError,
    ConfigurationError,
    InvalidAmountError,
    MissingEmailError,
    SignatureError,
)
from daniel_award.offerings import canonical_amount
from . import stripe_client
from .metadata import extract_confirmation, make_metadata
from .models import ConfirmationRecord, PaymentRequest
from .signature import verify_signature

logger = logging.getLogger(__name__)
confirmation_logger = logging.getLogger("daniel_award.confirmations")

PAYMENT_SUCCEEDED = "payment_intent.succeeded"


# module daniel_award.payments.service
def parse_amount(raw: Any) -> Optional[Decimal]:
    """
    Convertit le montant envoyé par le client (unités majeures) en Decimal.
    - Accepte int, float ou chaîne numérique.
    - Retourne None si absent, booléen, non numérique, non fini ou <= 0.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, float) and not math.isfinite(raw):
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def to_minor_units(amount: Decimal) -> int:
    """Montant en cents (devise à deux décimales), arrondi au plus proche."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_intent(order: PaymentRequest) -> Dict[str, str]:
    """
    Crée un PaymentIntent pour une inscription.
    Ordre des contrôles:
      1) configuration Stripe présente (ConfigurationError, 500, sans appel réseau)
      2) montant strictement positif (InvalidAmountError, 400)
      3) email présent (MissingEmailError, 400)
      4) si STRICT_PRICING: montant == prix catalogue (AmountMismatchError, 400)
    Le montant client est pris tel quel par défaut (question ouverte, cf. DESIGN.md).
    Retour: {"clientSecret": ..., "intentId": ...}
    """
    if not config.STRIPE_SECRET_KEY:
        raise ConfigurationError()

    amount = parse_amount(order.amount)
    if amount is None or to_minor_units(amount) < 1:
        raise InvalidAmountError()
    if not order.email:
        raise MissingEmailError()

    if config.STRICT_PRICING:
        expected = canonical_amount(order.tier, order.seats)
        if expected is None or Decimal(expected) != amount:
            logger.warning(
                "payments.intent amount mismatch tier=%s seats=%s amount=%s expected=%s",
                order.tier, order.seats, amount, expected,
            )
            raise AmountMismatchError()

    intent = stripe_client.create_payment_intent(
        amount=to_minor_units(amount),
        currency=config.STRIPE_CURRENCY,
        description=f"{config.EVENT_NAME} - {order.tier}",
        receipt_email=order.email,
        metadata=make_metadata(order, config.EVENT_NAME),
    )
    logger.info("payments.intent created id=%s tier=%s amount=%s", intent.get("id"), order.tier, amount)
    return {
        "clientSecret": intent.get("client_secret") or "",
        "intentId": intent.get("id") or "",
    }


def emit_confirmation(record: ConfirmationRecord) -> ConfirmationRecord:
    """
    Sink opérationnel des paiements confirmés (logger daniel_award.confirmations).
    Pas de déduplication: une relivraison Stripe produit une seconde ligne.
    """
    confirmation_logger.info(
        "[%s] Payment confirmed: %s - %s (%s) - $%s - %s",
        config.EVENT_NAME,
        record.intent_id,
        record.buyer_name,
        record.email,
        record.amount_major,
        record.tier,
    )
    return record


def handle_webhook(payload: bytes, signature_header: Optional[str]) -> Dict[str, bool]:
    """
    Traite un webhook Stripe.
    - Exige STRIPE_SECRET_KEY et STRIPE_WEBHOOK_SECRET (ConfigurationError sinon, jamais de no-op silencieux)
    - Signature invalide/périmée => SignatureError (400), aucun traitement
    - payment_intent.succeeded => émet une ConfirmationRecord
    - Tout autre type (ou corps illisible) => accusé de réception sans effet,
      pour que Stripe cesse de relivrer
    """
    if not config.STRIPE_SECRET_KEY or not config.STRIPE_WEBHOOK_SECRET:
        raise ConfigurationError("Not configured")

    if not verify_signature(
        payload,
        signature_header,
        config.STRIPE_WEBHOOK_SECRET,
        tolerance=config.WEBHOOK_TOLERANCE_SECONDS,
    ):
        logger.warning("payments.webhook rejected: invalid signature")
        raise SignatureError()

    try:
        event = stripe_client.construct_event(payload)
    except ValueError:
        logger.warning("payments.webhook signed payload is not a JSON event object")
        return {"received": True}

    event_type = event.get("type")
    if event_type == PAYMENT_SUCCEEDED:
        emit_confirmation(extract_confirmation(event))
    else:
        logger.debug("payments.webhook ignored type=%s id=%s", event_type, event.get("id"))
    return {"received": True}
