"""
Module 'wizard': assistant d'inscription en 4 étapes (infos, invités, récapitulatif, paiement).
"""

from .guests import HOST, GuestGrid, GuestSeat, HostTable, SeatKey, build_grid
from .state import BuyerInfo, IntentHandle, OrderSnapshot, OrderState, Step
from .review import build_review, confirmation_summary, payment_summary
from .client import IntentApiClient, IntentRequestError, build_intent_payload
from .session import PaymentConfirmer, ProcessorResult, RegistrationWizard

__all__ = [
    # guests
    "HOST",
    "HostTable",
    "SeatKey",
    "GuestSeat",
    "GuestGrid",
    "build_grid",
    # state
    "Step",
    "BuyerInfo",
    "OrderSnapshot",
    "IntentHandle",
    "OrderState",
    # review
    "build_review",
    "payment_summary",
    "confirmation_summary",
    # client / session
    "IntentApiClient",
    "IntentRequestError",
    "build_intent_payload",
    "PaymentConfirmer",
    "ProcessorResult",
    "RegistrationWizard",
]
