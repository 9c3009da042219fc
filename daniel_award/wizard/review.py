"""
Projections en lecture seule de l'état (étape 3 'Review', résumé de paiement, confirmation).
Aucune donnée ici n'est stockée: tout est recalculé depuis OrderState.
"""
from typing import List, Optional

from pydantic import BaseModel

from daniel_award.utils.formatting import format_money
from .guests import GuestSeat
from .state import OrderState

# module daniel_award.wizard.review
PLACEHOLDER = "—"


class ReviewGuest(BaseModel):
    label: str
    name: str
    vip: bool = False


class ReviewProjection(BaseModel):
    offering: str
    name: str
    email: str
    phone: str
    organization: Optional[str] = None
    total: int
    total_display: str
    host_guests: List[ReviewGuest] = []
    table_guests: List[ReviewGuest] = []
    vip_count: int = 0


class PaymentSummary(BaseModel):
    offering: str
    seats_label: str
    registrant: str
    total: int
    total_display: str
    button_text: str


class ConfirmationSummary(BaseModel):
    offering: str
    amount_display: str
    email: str
    reference: str


def _guest_label(seat: GuestSeat, multi_table: bool) -> str:
    if seat.is_host or not multi_table:
        return f"Seat {seat.seat}"
    return f"T{seat.table + 1} Seat {seat.seat}"


def _named(seats: List[GuestSeat], multi_table: bool) -> List[ReviewGuest]:
    return [
        ReviewGuest(label=_guest_label(s, multi_table), name=f"{s.first} {s.last}".strip(), vip=s.is_vip)
        for s in seats
        if s.has_name
    ]


def build_review(state: OrderState) -> ReviewProjection:
    """
    Résumé de l'étape 3.
    - Champs acheteur vides => '—', organisation omise si vide
    - Seules les places nommées sont listées; préfixe 'T<n>' si plusieurs tables
    """
    buyer = state.buyer
    multi_table = state.tables > 1
    return ReviewProjection(
        offering=state.offering_name,
        name=buyer.full_name or PLACEHOLDER,
        email=buyer.email or PLACEHOLDER,
        phone=buyer.phone or PLACEHOLDER,
        organization=buyer.org or None,
        total=state.price,
        total_display=format_money(state.price),
        host_guests=_named(state.guests.host_seats, multi_table),
        table_guests=_named(state.guests.table_seats, multi_table),
        vip_count=state.guests.vip_count,
    )


def payment_summary(state: OrderState) -> PaymentSummary:
    total = format_money(state.price)
    return PaymentSummary(
        offering=state.offering_name,
        seats_label=f"{state.seats} seat{'s' if state.seats != 1 else ''}",
        registrant=state.buyer.full_name,
        total=state.price,
        total_display=total,
        button_text=f"Complete Payment - {total}",
    )


def confirmation_summary(state: OrderState) -> Optional[ConfirmationSummary]:
    if not state.is_confirmed:
        return None
    return ConfirmationSummary(
        offering=state.offering_name,
        amount_display=format_money(state.price),
        email=state.buyer.email,
        reference=state.confirmation.reference,
    )


def guests_text(state: OrderState) -> str:
    """
    Texte libre transmis au processeur (métadonnée 'guests'): demandes spéciales puis
    invités nommés, ex: "Requests: wheelchair | Guests: Host Seat 1: Ann Lee (VIP); T1 Seat 2: Bo Chan".
    """
    parts = []
    if state.buyer.notes:
        parts.append(f"Requests: {state.buyer.notes}")
    multi_table = state.tables > 1
    names = []
    for seat in state.guests.seats:
        if not seat.has_name:
            continue
        label = _guest_label(seat, multi_table)
        if seat.is_host:
            label = f"Host {label}"
        vip = " (VIP)" if seat.vip_checked else ""
        names.append(f"{label}: {seat.first} {seat.last}".strip() + vip)
    if names:
        parts.append("Guests: " + "; ".join(names))
    return " | ".join(parts)
