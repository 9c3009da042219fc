"""
Session de l'assistant: relie l'état pur (state.py) aux effets asynchrones
(création d'intention côté serveur, confirmation côté processeur).

Règles:
- une intention n'est demandée qu'en entrant à l'étape 4, et réutilisée tant que
  l'instantané de commande est inchangé
- une réponse arrivée après un changement de commande est ignorée
- un paiement n'est confirmé que si le processeur annonce 'succeeded' pour l'intention courante
- toute erreur est affichée en ligne et le bouton de paiement redevient utilisable
"""
import asyncio
import logging
from typing import Any, Dict, Optional, Protocol, Tuple

from pydantic import BaseModel

from daniel_award.offerings import Catalog, get_catalog
from . import state as transitions
from .client import IntentApiClient, IntentRequestError, build_intent_payload
from .guests import SeatKey
from .state import IntentHandle, OrderSnapshot, OrderState, Step

logger = logging.getLogger(__name__)

# module daniel_award.wizard.session
UNKNOWN_OFFERING_MESSAGE = "This sponsorship level is not available."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
NOT_COMPLETED_MESSAGE = "Payment was not completed. Please try again."
ORDER_CHANGED_MESSAGE = "Your registration changed. Please review the total and submit payment again."
STATUS_SUCCEEDED = "succeeded"


class ProcessorResult(BaseModel):
    """Résultat de la confirmation de carte renvoyé par le processeur (Stripe.js côté navigateur)."""
    status: str = ""
    intent_id: str = ""
    error: Optional[str] = None


class PaymentConfirmer(Protocol):
    async def confirm_payment(self, client_secret: str, billing_details: Dict[str, Any]) -> ProcessorResult:
        ...


def billing_details(state: OrderState) -> Dict[str, Any]:
    buyer = state.buyer
    details = {"name": buyer.full_name, "email": buyer.email}
    if buyer.phone:
        details["phone"] = buyer.phone
    return details


class RegistrationWizard:
    def __init__(self, intent_client: IntentApiClient, confirmer: PaymentConfirmer, catalog: Optional[Catalog] = None):
        self.intent_client = intent_client
        self.confirmer = confirmer
        self.catalog = catalog or get_catalog()
        self.state = OrderState()
        self._pending: Optional[Tuple[OrderSnapshot, "asyncio.Task[Optional[IntentHandle]]"]] = None
        self._confirming = False

    # --- sélection et saisie (synchrones) ---

    def select_tier(self, name: str) -> OrderState:
        tier = self.catalog.find_tier(name)
        if tier is None:
            self.state = transitions.with_error(self.state, UNKNOWN_OFFERING_MESSAGE)
        else:
            self.state = transitions.select_tier(self.state, tier)
        return self.state

    def select_individual(self, quantity: Optional[int] = None) -> OrderState:
        self.state = transitions.select_individual(self.state, self.catalog.individual, quantity)
        return self.state

    def change_quantity(self, delta: int) -> OrderState:
        self.state = transitions.change_quantity(self.state, delta, self.catalog.individual)
        return self.state

    def update_buyer(self, **fields: str) -> OrderState:
        self.state = transitions.update_buyer(self.state, **fields)
        return self.state

    def set_guest_name(self, key: SeatKey, first: Optional[str] = None, last: Optional[str] = None) -> OrderState:
        self.state = transitions.set_guest_name(self.state, key, first, last)
        return self.state

    def toggle_vip(self, key: SeatKey, checked: bool) -> OrderState:
        self.state = transitions.toggle_vip(self.state, key, checked)
        return self.state

    # --- navigation et paiement (asynchrones) ---

    async def go_to_step(self, step: int) -> OrderState:
        self.state = transitions.go_to_step(self.state, step)
        if self.state.step == Step.PAYMENT and not self.state.is_confirmed:
            await self.ensure_intent()
        return self.state

    async def ensure_intent(self) -> Optional[IntentHandle]:
        """
        Retourne une intention valide pour la commande courante.
        - Réutilise l'intention existante si l'instantané n'a pas changé
        - Une requête déjà en cours pour le même instantané est partagée
        """
        if transitions.handle_is_live(self.state):
            return self.state.handle
        snapshot = transitions.snapshot_of(self.state)
        if self._pending and self._pending[0] == snapshot and not self._pending[1].done():
            return await asyncio.shield(self._pending[1])

        self.state = transitions.set_busy(transitions.invalidate_handle(self.state), True)
        task = asyncio.ensure_future(self._request_intent(snapshot, build_intent_payload(self.state)))
        self._pending = (snapshot, task)
        try:
            return await task
        finally:
            if self._pending and self._pending[1] is task:
                self._pending = None
                # Réponse ignorée ou erreur périmée: le bouton redevient utilisable
                if self.state.busy and not transitions.handle_is_live(self.state):
                    self.state = transitions.set_busy(self.state, False)

    async def _request_intent(self, snapshot: OrderSnapshot, payload: Dict[str, Any]) -> Optional[IntentHandle]:
        try:
            response = await self.intent_client.create_intent(payload)
        except IntentRequestError as e:
            if transitions.snapshot_of(self.state) == snapshot:
                self.state = transitions.with_error(self.state, e.message)
            return None

        if transitions.snapshot_of(self.state) != snapshot or self.state.step != Step.PAYMENT:
            logger.info("wizard.intent discarded (order changed) intent=%s", response.intent_id)
            return None
        handle = IntentHandle(intent_id=response.intent_id, client_secret=response.client_secret, snapshot=snapshot)
        self.state = transitions.attach_handle(self.state, handle)
        return handle

    async def submit_payment(self) -> OrderState:
        """
        Confirme la carte auprès du processeur avec l'intention courante.
        - Appel ignoré si une confirmation est déjà en cours, ou hors étape 4
        - Intention périmée: jamais utilisée, une nouvelle est demandée
        """
        if self._confirming or self.state.is_confirmed or self.state.step != Step.PAYMENT:
            return self.state
        if not transitions.handle_is_live(self.state):
            stale = self.state.handle is not None
            handle = await self.ensure_intent()
            if stale and handle is not None:
                self.state = transitions.with_error(self.state, ORDER_CHANGED_MESSAGE)
            return self.state

        handle = self.state.handle
        self._confirming = True
        self.state = transitions.set_busy(transitions.with_error(self.state, None), True)
        try:
            result = await self.confirmer.confirm_payment(handle.client_secret, billing_details(self.state))
        except Exception:
            logger.exception("wizard.payment confirmation failed intent=%s", handle.intent_id)
            self.state = transitions.with_error(self.state, UNEXPECTED_ERROR_MESSAGE)
            return self.state
        finally:
            self._confirming = False

        if result.error:
            self.state = transitions.with_error(self.state, result.error)
        elif result.status == STATUS_SUCCEEDED and result.intent_id == handle.intent_id:
            confirmed = transitions.mark_confirmed(self.state, handle.intent_id)
            if confirmed.is_confirmed:
                self.state = confirmed
                logger.info("wizard.payment confirmed intent=%s", handle.intent_id)
            else:
                logger.warning("wizard.payment succeeded for a superseded order intent=%s", handle.intent_id)
                self.state = transitions.with_error(self.state, ORDER_CHANGED_MESSAGE)
        else:
            self.state = transitions.with_error(self.state, NOT_COMPLETED_MESSAGE)
        return self.state
