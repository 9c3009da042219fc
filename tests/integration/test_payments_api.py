import stripe

from daniel_award import config


GOLD = {
    "amount": 15000,
    "tier": "Gold Sponsor",
    "firstName": "Jane",
    "lastName": "Doe",
    "email": "jane@example.com",
    "seats": 10,
    "guests": "",
}


def test_create_payment_ok(client, fake_intent):
    res = client.post("/api/payment", json=GOLD)
    assert res.status_code == 200
    assert res.json() == {"clientSecret": "pi_test0001abcdef_secret_xyz", "intentId": "pi_test0001abcdef"}
    assert fake_intent[0]["amount"] == 1500000


def test_create_payment_invalid_amount(client, fake_intent):
    res = client.post("/api/payment", json={**GOLD, "amount": 0})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid amount."}
    assert fake_intent == []


def test_create_payment_missing_email(client, fake_intent):
    res = client.post("/api/payment", json={**GOLD, "email": ""})
    assert res.status_code == 400
    assert res.json() == {"error": "Email is required."}


def test_create_payment_not_configured(client, monkeypatch, fake_intent):
    monkeypatch.setattr(config, "STRIPE_SECRET_KEY", "")
    res = client.post("/api/payment", json=GOLD)
    assert res.status_code == 500
    assert res.json() == {"error": "Payment system not configured."}
    assert fake_intent == []


def test_create_payment_invalid_json(client):
    res = client.post("/api/payment", content=b"{not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid request body."}


def test_create_payment_non_object_body(client):
    res = client.post("/api/payment", json=[1, 2, 3])
    assert res.status_code == 400


def test_create_payment_stripe_rejection(client, monkeypatch):
    def _raise(**kwargs):
        raise stripe.CardError("Your card was declined.", None, "card_declined")

    monkeypatch.setattr(stripe.PaymentIntent, "create", _raise)
    res = client.post("/api/payment", json=GOLD)
    assert res.status_code == 400
    assert "error" in res.json()


def test_error_responses_carry_cors(client, fake_intent):
    res = client.post("/api/payment", json={**GOLD, "amount": -1}, headers={"Origin": "https://sponsor.example"})
    assert res.status_code == 400
    assert res.headers["access-control-allow-origin"] == "https://sponsor.example"
