"""
État de l'assistant d'inscription (4 étapes) et transitions pures.

Chaque transition reçoit un OrderState et retourne un nouvel OrderState (modèles gelés):
- le prix est dérivé de (offre, quantité), jamais stocké à part
- choisir une offre réinitialise l'assistant (étape 1, invités, intention, confirmation)
- une intention de paiement n'est réutilisable que si l'instantané de commande est inchangé
- l'état confirmé n'est atteint que via mark_confirmed pour l'intention courante
"""
from enum import IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, computed_field

from daniel_award.offerings import IndividualOffering, Offering, TierOffering
from . import guests as guest_grid
from .guests import GuestGrid, SeatKey

# module daniel_award.wizard.state
REQUIRED_FIELDS_MESSAGE = "Please fill in your first name, last name, and email before continuing."


class Step(IntEnum):
    INFO = 1
    GUESTS = 2
    REVIEW = 3
    PAYMENT = 4


class BuyerInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    org: str = ""
    notes: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def missing_required(self) -> List[str]:
        return [f for f in ("first_name", "last_name", "email") if not getattr(self, f).strip()]


class OrderSnapshot(BaseModel):
    """Champs qui, s'ils changent, rendent une intention de paiement périmée."""
    model_config = ConfigDict(frozen=True)

    offering: str
    amount: int
    seats: int
    first_name: str
    last_name: str
    email: str


class IntentHandle(BaseModel):
    model_config = ConfigDict(frozen=True)

    intent_id: str
    client_secret: str
    snapshot: OrderSnapshot


class Confirmation(BaseModel):
    model_config = ConfigDict(frozen=True)

    intent_id: str
    reference: str


class OrderState(BaseModel):
    model_config = ConfigDict(frozen=True)

    offering: Optional[Offering] = None
    quantity: int = 1
    step: Step = Step.INFO
    buyer: BuyerInfo = BuyerInfo()
    guests: GuestGrid = GuestGrid()
    handle: Optional[IntentHandle] = None
    confirmation: Optional[Confirmation] = None
    error: Optional[str] = None
    busy: bool = False

    @computed_field
    @property
    def price(self) -> int:
        return self.offering.price_for(self.quantity) if self.offering else 0

    @property
    def offering_name(self) -> str:
        return self.offering.display_name if self.offering else ""

    @property
    def seats(self) -> int:
        return self.offering.seat_count(self.quantity) if self.offering else 0

    @property
    def tables(self) -> int:
        return self.offering.tables if isinstance(self.offering, TierOffering) else 0

    @property
    def host_seats(self) -> int:
        return self.offering.host_seats if isinstance(self.offering, TierOffering) else 0

    @property
    def is_confirmed(self) -> bool:
        return self.confirmation is not None


def confirmation_reference(intent_id: str) -> str:
    """Référence lisible: id d'intention sans 'pi_', 12 premiers caractères, en majuscules."""
    return intent_id.replace("pi_", "", 1)[:12].upper()


def _reset_for(state: OrderState, offering: Offering, quantity: int) -> OrderState:
    return state.model_copy(update={
        "offering": offering,
        "quantity": quantity,
        "step": Step.INFO,
        "guests": guest_grid.build_grid(offering, quantity),
        "handle": None,
        "confirmation": None,
        "error": None,
        "busy": False,
    })


def select_tier(state: OrderState, tier: TierOffering) -> OrderState:
    return _reset_for(state, tier, state.quantity)


def select_individual(state: OrderState, individual: IndividualOffering, quantity: Optional[int] = None) -> OrderState:
    q = individual.clamp(state.quantity if quantity is None else quantity)
    return _reset_for(state, individual, q)


def change_quantity(state: OrderState, delta: int, individual: IndividualOffering) -> OrderState:
    """
    Sélecteur de quantité (+/-), borné à [1, max].
    - Si les places individuelles sont actives: prix recalculé, intention invalidée,
      grille recalculée en gardant les noms des places conservées. L'étape courante est conservée.
    - Sinon seul le compteur affiché change.
    """
    if state.is_confirmed:
        return state
    q = individual.clamp(state.quantity + int(delta))
    if q == state.quantity:
        return state
    if not isinstance(state.offering, IndividualOffering):
        return state.model_copy(update={"quantity": q})
    return state.model_copy(update={
        "quantity": q,
        "guests": guest_grid.build_grid(state.offering, q, previous=state.guests),
        "handle": None,
        "error": None,
        "busy": False,
    })


def update_buyer(
    state: OrderState,
    *,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    org: Optional[str] = None,
    notes: Optional[str] = None,
) -> OrderState:
    if state.is_confirmed:
        return state
    values = {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "phone": phone,
        "org": org,
        "notes": notes,
    }
    update = {k: v.strip() for k, v in values.items() if v is not None}
    if not update:
        return state
    return state.model_copy(update={"buyer": state.buyer.model_copy(update=update)})


def set_guest_name(state: OrderState, key: SeatKey, first: Optional[str] = None, last: Optional[str] = None) -> OrderState:
    if state.is_confirmed:
        return state
    return state.model_copy(update={"guests": guest_grid.set_guest_name(state.guests, key, first, last)})


def toggle_vip(state: OrderState, key: SeatKey, checked: bool) -> OrderState:
    if state.is_confirmed:
        return state
    return state.model_copy(update={"guests": guest_grid.toggle_vip(state.guests, key, checked)})


def go_to_step(state: OrderState, step: int) -> OrderState:
    """
    Navigation entre étapes.
    - Sans offre, ou une fois confirmé: sans effet.
    - Quitter l'étape 1 vers l'avant exige prénom, nom et email (erreur en ligne sinon).
    - Entrer à l'étape 2 recalcule la grille seulement si sa forme a changé (noms conservés).
    """
    try:
        target = Step(step)
    except ValueError:
        return state
    if state.offering is None or state.is_confirmed:
        return state
    if state.step == Step.INFO and target > Step.INFO and state.buyer.missing_required():
        return state.model_copy(update={"error": REQUIRED_FIELDS_MESSAGE})
    # busy reste piloté par la session (requête d'intention en cours)
    update = {"step": target, "error": None}
    if target == Step.GUESTS:
        grid = guest_grid.build_grid(state.offering, state.quantity, previous=state.guests)
        if grid.layout != state.guests.layout:
            update["guests"] = grid
    return state.model_copy(update=update)


def snapshot_of(state: OrderState) -> OrderSnapshot:
    return OrderSnapshot(
        offering=state.offering_name,
        amount=state.price,
        seats=state.seats,
        first_name=state.buyer.first_name,
        last_name=state.buyer.last_name,
        email=state.buyer.email,
    )


def handle_is_live(state: OrderState) -> bool:
    return state.handle is not None and state.handle.snapshot == snapshot_of(state)


def attach_handle(state: OrderState, handle: IntentHandle) -> OrderState:
    return state.model_copy(update={"handle": handle, "busy": False, "error": None})


def invalidate_handle(state: OrderState) -> OrderState:
    return state.model_copy(update={"handle": None})


def with_error(state: OrderState, message: Optional[str]) -> OrderState:
    return state.model_copy(update={"error": message, "busy": False})


def set_busy(state: OrderState, busy: bool) -> OrderState:
    return state.model_copy(update={"busy": busy})


def mark_confirmed(state: OrderState, intent_id: str) -> OrderState:
    """Passe à l'état confirmé uniquement pour l'intention courante et encore valide."""
    if state.step != Step.PAYMENT or not handle_is_live(state) or state.handle.intent_id != intent_id:
        return state
    return state.model_copy(update={
        "confirmation": Confirmation(intent_id=intent_id, reference=confirmation_reference(intent_id)),
        "busy": False,
        "error": None,
    })
