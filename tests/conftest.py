import pytest
from typing import Generator, Dict, Any
from fastapi.testclient import TestClient

from daniel_award import config
from daniel_award.app import app as fastapi_app

TEST_SECRET_KEY = "sk_test_123"
TEST_PUBLISHABLE_KEY = "pk_test_123"
TEST_WEBHOOK_SECRET = "whsec_test_123"


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def app():
    return fastapi_app


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


# Configuration Stripe de test par défaut (aucune valeur du .env local ne fuit dans les tests)
@pytest.fixture(autouse=True)
def stripe_settings(monkeypatch) -> Dict[str, Any]:
    settings: Dict[str, Any] = {
        "STRIPE_SECRET_KEY": TEST_SECRET_KEY,
        "STRIPE_PUBLISHABLE_KEY": TEST_PUBLISHABLE_KEY,
        "STRIPE_WEBHOOK_SECRET": TEST_WEBHOOK_SECRET,
        "STRIPE_TIMEOUT_SECONDS": 20,
        "STRIPE_CURRENCY": "usd",
        "WEBHOOK_TOLERANCE_SECONDS": 300,
        "STRICT_PRICING": False,
        "EVENT_NAME": "Daniel Award",
        "CORS_ORIGINS": ["*"],
        "PAGE_CACHE_SECONDS": 300,
    }
    for key, value in settings.items():
        monkeypatch.setattr(config, key, value, raising=True)
    return settings


# Empêche tout appel réseau réel vers Stripe
@pytest.fixture(autouse=True)
def _no_stripe_network(monkeypatch):
    import stripe

    def _blocked(**kwargs):
        raise AssertionError("appel Stripe non mocké")

    monkeypatch.setattr(stripe.PaymentIntent, "create", _blocked, raising=True)


@pytest.fixture
def fake_intent(monkeypatch):
    """Remplace stripe.PaymentIntent.create et enregistre les appels."""
    import stripe

    calls = []

    def _create(**kwargs):
        calls.append(kwargs)
        n = len(calls)
        return {"id": f"pi_test{n:04d}abcdef", "client_secret": f"pi_test{n:04d}abcdef_secret_xyz"}

    monkeypatch.setattr(stripe.PaymentIntent, "create", _create, raising=True)
    return calls


@pytest.fixture
def sign_webhook():
    """Construit un en-tête Stripe-Signature valide (horodatage courant par défaut)."""
    import hashlib
    import hmac
    import time

    def _sign(payload, secret=TEST_WEBHOOK_SECRET, timestamp=None):
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        ts = int(time.time()) if timestamp is None else int(timestamp)
        digest = hmac.new(secret.encode("utf-8"), f"{ts}.".encode() + payload, hashlib.sha256).hexdigest()
        return f"t={ts},v1={digest}"

    return _sign
