"""
Client HTTP de l'API d'intention (POST /api/payment), utilisé par l'assistant à l'étape 4.
"""
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from daniel_award.payments.models import IntentResponse
from .review import guests_text
from .state import OrderState

logger = logging.getLogger(__name__)

# module daniel_award.wizard.client
LOAD_ERROR_MESSAGE = "Unable to load payment form. Please try again."
DEFAULT_TIMEOUT_SECONDS = 15.0


class IntentRequestError(Exception):
    def __init__(self, message: str = LOAD_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message


def build_intent_payload(state: OrderState) -> Dict[str, Any]:
    """Corps JSON attendu par POST /api/payment (noms camelCase)."""
    buyer = state.buyer
    return {
        "amount": state.price,
        "tier": state.offering_name,
        "firstName": buyer.first_name,
        "lastName": buyer.last_name,
        "email": buyer.email,
        "phone": buyer.phone,
        "org": buyer.org,
        "seats": state.seats,
        "guests": guests_text(state),
    }


class IntentApiClient:
    """
    Demande une intention de paiement au serveur.
    - transport: injectable (httpx.MockTransport, httpx.ASGITransport) pour les tests
    - Toute erreur est convertie en IntentRequestError avec un message affichable
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        path: str = "/api/payment",
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.path = path

    async def create_intent(self, payload: Dict[str, Any]) -> IntentResponse:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
                res = await client.post(self.path, json=payload)
        except httpx.HTTPError as e:
            logger.warning("intent request failed: %s", e)
            raise IntentRequestError() from e

        try:
            data = res.json()
        except ValueError as e:
            logger.warning("intent response is not JSON (status=%s)", res.status_code)
            raise IntentRequestError() from e
        if not isinstance(data, dict):
            raise IntentRequestError()
        if data.get("error"):
            raise IntentRequestError(str(data["error"]))
        if res.status_code >= 400:
            raise IntentRequestError()
        try:
            return IntentResponse.model_validate(data)
        except ValidationError as e:
            logger.warning("intent response incomplete: %s", sorted(data))
            raise IntentRequestError() from e
