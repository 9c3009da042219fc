from daniel_award.offerings import find_tier, get_catalog
from daniel_award.wizard import state as wiz
from daniel_award.wizard.client import build_intent_payload
from daniel_award.wizard.guests import HOST
from daniel_award.wizard.review import (
    PLACEHOLDER,
    build_review,
    confirmation_summary,
    guests_text,
    payment_summary,
)
from daniel_award.wizard.state import IntentHandle, OrderState


def _gold_order():
    state = wiz.select_tier(OrderState(), find_tier("Gold Sponsor"))
    state = wiz.update_buyer(state, first_name="Jane", last_name="Doe", email="jane@example.com")
    state = wiz.go_to_step(state, 2)
    state = wiz.set_guest_name(state, (HOST, 1), "Ann", "Lee")
    state = wiz.set_guest_name(state, (0, 1), "Bo", "Chan")
    state = wiz.set_guest_name(state, (0, 2), "Cy", "Diaz")
    state = wiz.toggle_vip(state, (0, 1), True)
    return state


def test_review_gold_scenario():
    review = build_review(_gold_order())
    assert review.offering == "Gold Sponsor"
    assert review.name == "Jane Doe"
    assert review.phone == PLACEHOLDER
    assert review.organization is None
    assert review.total == 15000
    assert review.total_display == "$15,000"
    assert [g.name for g in review.host_guests] == ["Ann Lee"]
    assert [(g.label, g.name, g.vip) for g in review.table_guests] == [
        ("Seat 1", "Bo Chan", True),
        ("Seat 2", "Cy Diaz", False),
    ]
    # 2 places d'honneur + 1 case cochée
    assert review.vip_count == 3


def test_review_labels_tables_when_several():
    state = wiz.select_tier(OrderState(), find_tier("Platinum Sponsor"))
    state = wiz.update_buyer(state, first_name="J", last_name="D", email="j@d.com", org="Acme")
    state = wiz.go_to_step(state, 2)
    state = wiz.set_guest_name(state, (1, 3), "Eve", "Fox")
    review = build_review(state)
    assert review.organization == "Acme"
    assert [g.label for g in review.table_guests] == ["T2 Seat 3"]


def test_review_empty_buyer_placeholders():
    review = build_review(wiz.select_individual(OrderState(), get_catalog().individual, 2))
    assert review.name == PLACEHOLDER
    assert review.email == PLACEHOLDER
    assert review.total == 500


def test_payment_summary_button_text():
    summary = payment_summary(_gold_order())
    assert summary.button_text == "Complete Payment - $15,000"
    assert summary.seats_label == "10 seats"
    assert summary.registrant == "Jane Doe"


def test_confirmation_summary_only_when_confirmed():
    state = wiz.go_to_step(_gold_order(), 4)
    assert confirmation_summary(state) is None
    handle = IntentHandle(intent_id="pi_1abc", client_secret="s", snapshot=wiz.snapshot_of(state))
    state = wiz.mark_confirmed(wiz.attach_handle(state, handle), "pi_1abc")
    summary = confirmation_summary(state)
    assert summary.amount_display == "$15,000"
    assert summary.reference == "1ABC"
    assert summary.email == "jane@example.com"


def test_guests_text_and_intent_payload():
    state = wiz.update_buyer(_gold_order(), notes="Wheelchair access")
    text = guests_text(state)
    assert text == "Requests: Wheelchair access | Guests: Host Seat 1: Ann Lee; Seat 1: Bo Chan (VIP); Seat 2: Cy Diaz"

    payload = build_intent_payload(state)
    assert payload["amount"] == 15000
    assert payload["tier"] == "Gold Sponsor"
    assert payload["firstName"] == "Jane"
    assert payload["seats"] == 10
    assert payload["guests"] == text
