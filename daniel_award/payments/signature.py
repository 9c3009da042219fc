"""
Vérification des signatures de webhook Stripe (HMAC-SHA256 horodaté).

En-tête attendu: "t=<unix-seconds>,v1=<hex>[,v1=<hex>...]" (seul le premier v1 est retenu).
Le calcul HMAC est délégué au SDK (stripe.WebhookSignature); ce module ajoute
la sélection du premier v1 et une fenêtre de fraîcheur symétrique (le SDK
n'écarte pas les horodatages futurs).
verify_signature ne lève jamais: toute anomalie (en-tête mal formé, horodatage hors
fenêtre, erreur d'encodage) donne False.
"""
import logging
import time
from typing import Optional, Tuple, Union

import stripe

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_SECONDS = 300

BytesLike = Union[bytes, str]


# module daniel_award.payments.signature
def parse_signature_header(header: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Extrait (t, v1) d'un en-tête de signature.
    - Les champs inconnus (ex: v0) sont ignorés.
    - Plusieurs v1 (rotation de secret côté Stripe): le premier est retenu.
    """
    timestamp: Optional[str] = None
    signature: Optional[str] = None
    for part in (header or "").split(","):
        key, sep, value = part.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            timestamp = value
        elif key == "v1" and signature is None:
            signature = value
    return timestamp, signature


def verify_signature(
    payload: BytesLike,
    signature_header: Optional[str],
    secret: str,
    tolerance: int = DEFAULT_TOLERANCE_SECONDS,
    now: Optional[float] = None,
) -> bool:
    """
    Vérifie l'authenticité et la fraîcheur d'un webhook.
    - Rejette si t ou v1 manquant, ou si |now - t| > tolerance (t = now - 300 accepté, now - 301 rejeté).
    - HMAC et comparaison en temps constant via stripe.WebhookSignature.verify_header,
      appliqués au seul premier v1.
    """
    try:
        timestamp, signature = parse_signature_header(signature_header)
        if not timestamp or not signature:
            return False
        ts = int(timestamp)
        current = time.time() if now is None else now
        if abs(current - ts) > tolerance:
            logger.warning("payments.signature stale timestamp age=%ss", int(current - ts))
            return False
        # Fraîcheur déjà contrôlée ci-dessus: tolerance=None côté SDK
        stripe.WebhookSignature.verify_header(payload, f"t={ts},v1={signature}", secret, tolerance=None)
        return True
    except stripe.SignatureVerificationError:
        return False
    except Exception:
        logger.warning("payments.signature verification error", exc_info=True)
        return False
