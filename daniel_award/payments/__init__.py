"""
Module 'payments' (feature-first): point d'entrée public.
Réunit signature webhook, métadonnées Stripe, client Stripe et services.
"""

from .signature import parse_signature_header, verify_signature
from .models import PaymentRequest, IntentResponse, ConfirmationRecord
from .metadata import make_metadata, extract_confirmation
from .stripe_client import require_stripe, create_payment_intent, construct_event
from .service import create_intent, handle_webhook, emit_confirmation, parse_amount, to_minor_units

__all__ = [
    # signature
    "parse_signature_header",
    "verify_signature",
    # models
    "PaymentRequest",
    "IntentResponse",
    "ConfirmationRecord",
    # metadata
    "make_metadata",
    "extract_confirmation",
    # stripe
    "require_stripe",
    "create_payment_intent",
    "construct_event",
    # services
    "create_intent",
    "handle_webhook",
    "emit_confirmation",
    "parse_amount",
    "to_minor_units",
]
