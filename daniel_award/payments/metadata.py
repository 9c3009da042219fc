"""
Sérialisation/désérialisation des métadonnées Stripe (inscription <-> PaymentIntent).
"""
from typing import Any, Dict

from .models import ConfirmationRecord, PaymentRequest

GUESTS_METADATA_LIMIT = 500


# module daniel_award.payments.metadata
def make_metadata(order: PaymentRequest, event_name: str) -> Dict[str, str]:
    """
    Construit les métadonnées attachées au PaymentIntent.
    - Toutes les valeurs sont des chaînes (contrainte Stripe).
    - guests: texte libre tronqué à 500 caractères pour borner la taille des metadata.
    """
    return {
        "event": event_name,
        "tier": order.tier or "",
        "seats": str(order.seats or 0),
        "first_name": order.first_name or "",
        "last_name": order.last_name or "",
        "email": order.email,
        "phone": order.phone or "",
        "org": order.org or "",
        "guests": (order.guests or "")[:GUESTS_METADATA_LIMIT],
    }


def extract_confirmation(event: Dict[str, Any]) -> ConfirmationRecord:
    """
    Extrait la confirmation depuis un event Stripe payment_intent.succeeded.
    - Attend event.data.object.{id, amount, currency, metadata}
    - Tolérant: niveau absent, null ou d'un autre type => valeurs vides.
    """
    if not isinstance(event, dict):
        event = {}
    data = event.get("data")
    data_obj = data.get("object") if isinstance(data, dict) else None
    if not isinstance(data_obj, dict):
        data_obj = {}
    meta = data_obj.get("metadata")
    if not isinstance(meta, dict):
        meta = {}
    try:
        amount = int(data_obj.get("amount") or 0)
    except (TypeError, ValueError):
        amount = 0
    return ConfirmationRecord(
        event_id=str(event.get("id") or ""),
        intent_id=str(data_obj.get("id") or ""),
        amount=amount,
        currency=str(data_obj.get("currency") or ""),
        first_name=str(meta.get("first_name") or ""),
        last_name=str(meta.get("last_name") or ""),
        email=str(meta.get("email") or data_obj.get("receipt_email") or ""),
        tier=str(meta.get("tier") or ""),
        seats=str(meta.get("seats") or ""),
    )
