import asyncio

import pytest

from daniel_award.payments.models import IntentResponse
from daniel_award.wizard.client import IntentRequestError
from daniel_award.wizard.session import (
    NOT_COMPLETED_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    ProcessorResult,
    RegistrationWizard,
)
from daniel_award.wizard.state import Step


class FakeIntentClient:
    def __init__(self, fail_with=None):
        self.payloads = []
        self.fail_with = fail_with
        self.gate = None

    async def create_intent(self, payload):
        self.payloads.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with:
            raise IntentRequestError(self.fail_with)
        n = len(self.payloads)
        return IntentResponse(clientSecret=f"pi_{n}_secret", intentId=f"pi_{n}")


class FakeConfirmer:
    def __init__(self, result=None, exc=None):
        self.calls = []
        self.result = result
        self.exc = exc

    async def confirm_payment(self, client_secret, billing_details):
        self.calls.append((client_secret, billing_details))
        if self.exc:
            raise self.exc
        return self.result


def _wizard(intent_client=None, confirmer=None):
    return RegistrationWizard(intent_client or FakeIntentClient(), confirmer or FakeConfirmer())


def _fill(w):
    w.update_buyer(first_name="Jane", last_name="Doe", email="jane@example.com", phone="555-0100")


@pytest.mark.asyncio
async def test_individual_quantity_change_creates_fresh_intent():
    client = FakeIntentClient()
    w = _wizard(client)
    w.select_individual(1)
    _fill(w)
    await w.go_to_step(4)
    assert w.state.handle.intent_id == "pi_1"
    assert client.payloads[0]["amount"] == 250

    # Revenir en arrière puis revenir: même commande => intention réutilisée
    await w.go_to_step(3)
    await w.go_to_step(4)
    assert len(client.payloads) == 1

    w.change_quantity(+2)
    assert w.state.price == 750
    assert w.state.handle is None
    await w.go_to_step(4)
    assert len(client.payloads) == 2
    assert client.payloads[1]["amount"] == 750
    assert client.payloads[1]["seats"] == 3
    assert w.state.handle.intent_id == "pi_2"


@pytest.mark.asyncio
async def test_intent_error_shown_inline():
    w = _wizard(FakeIntentClient(fail_with="Invalid amount."))
    w.select_tier("Gold Sponsor")
    _fill(w)
    await w.go_to_step(4)
    assert w.state.step == Step.PAYMENT
    assert w.state.error == "Invalid amount."
    assert w.state.busy is False
    assert w.state.handle is None


@pytest.mark.asyncio
async def test_stale_intent_result_discarded():
    client = FakeIntentClient()
    client.gate = asyncio.Event()
    w = _wizard(client)
    w.select_tier("Gold Sponsor")
    _fill(w)

    task = asyncio.ensure_future(w.go_to_step(4))
    await asyncio.sleep(0)
    # L'acheteur change d'offre pendant la création
    w.select_tier("Silver Sponsor")
    client.gate.set()
    await task

    assert w.state.offering.name == "Silver Sponsor"
    assert w.state.handle is None
    assert w.state.step == Step.INFO


@pytest.mark.asyncio
async def test_buyer_edit_during_request_restores_button():
    client = FakeIntentClient()
    client.gate = asyncio.Event()
    w = _wizard(client)
    w.select_tier("Gold Sponsor")
    _fill(w)

    task = asyncio.ensure_future(w.go_to_step(4))
    await asyncio.sleep(0)
    assert w.state.busy is True
    w.update_buyer(email="new@example.com")
    client.gate.set()
    await task

    assert w.state.handle is None
    assert w.state.busy is False
    assert w.state.error is None


@pytest.mark.asyncio
async def test_buyer_edit_during_failed_request_restores_button():
    client = FakeIntentClient(fail_with="Invalid amount.")
    client.gate = asyncio.Event()
    w = _wizard(client)
    w.select_tier("Gold Sponsor")
    _fill(w)

    task = asyncio.ensure_future(w.go_to_step(4))
    await asyncio.sleep(0)
    w.update_buyer(last_name="Smith")
    client.gate.set()
    await task

    # Erreur d'une commande périmée: non affichée, bouton réactivé
    assert w.state.error is None
    assert w.state.busy is False


@pytest.mark.asyncio
async def test_back_and_forth_during_request_keeps_button_disabled():
    client = FakeIntentClient()
    client.gate = asyncio.Event()
    w = _wizard(client)
    w.select_tier("Gold Sponsor")
    _fill(w)

    first = asyncio.ensure_future(w.go_to_step(4))
    await asyncio.sleep(0)
    await w.go_to_step(3)
    assert w.state.busy is True
    second = asyncio.ensure_future(w.go_to_step(4))
    await asyncio.sleep(0)
    assert w.state.busy is True
    assert w.state.handle is None

    client.gate.set()
    await asyncio.gather(first, second)
    assert len(client.payloads) == 1
    assert w.state.handle.intent_id == "pi_1"
    assert w.state.busy is False


@pytest.mark.asyncio
async def test_offering_switch_invalidates_existing_handle():
    client = FakeIntentClient()
    w = _wizard(client)
    w.select_tier("Gold Sponsor")
    _fill(w)
    await w.go_to_step(4)
    assert w.state.handle.intent_id == "pi_1"
    assert client.payloads[0]["amount"] == 15000

    w.select_tier("Silver Sponsor")
    assert w.state.handle is None
    assert w.state.step == Step.INFO

    _fill(w)
    await w.go_to_step(4)
    assert len(client.payloads) == 2
    assert client.payloads[1]["amount"] == 7500
    assert client.payloads[1]["tier"] == "Silver Sponsor"
    assert w.state.handle.intent_id == "pi_2"


@pytest.mark.asyncio
async def test_submit_payment_success():
    confirmer = FakeConfirmer(ProcessorResult(status="succeeded", intent_id="pi_1"))
    w = _wizard(confirmer=confirmer)
    w.select_tier("Gold Sponsor")
    _fill(w)
    await w.go_to_step(4)
    state = await w.submit_payment()
    assert state.is_confirmed
    assert state.confirmation.reference == "1"
    secret, billing = confirmer.calls[0]
    assert secret == "pi_1_secret"
    assert billing == {"name": "Jane Doe", "email": "jane@example.com", "phone": "555-0100"}


@pytest.mark.asyncio
async def test_submit_payment_declined_restores_button():
    confirmer = FakeConfirmer(ProcessorResult(error="Your card was declined."))
    w = _wizard(confirmer=confirmer)
    w.select_tier("Gold Sponsor")
    _fill(w)
    await w.go_to_step(4)
    state = await w.submit_payment()
    assert not state.is_confirmed
    assert state.error == "Your card was declined."
    assert state.busy is False


@pytest.mark.asyncio
async def test_submit_payment_unexpected_error():
    w = _wizard(confirmer=FakeConfirmer(exc=RuntimeError("boom")))
    w.select_tier("Gold Sponsor")
    _fill(w)
    await w.go_to_step(4)
    state = await w.submit_payment()
    assert state.error == UNEXPECTED_ERROR_MESSAGE
    assert state.busy is False


@pytest.mark.asyncio
async def test_non_succeeded_status_not_confirmed():
    w = _wizard(confirmer=FakeConfirmer(ProcessorResult(status="processing", intent_id="pi_1")))
    w.select_tier("Gold Sponsor")
    _fill(w)
    await w.go_to_step(4)
    state = await w.submit_payment()
    assert not state.is_confirmed
    assert state.error == NOT_COMPLETED_MESSAGE


@pytest.mark.asyncio
async def test_stale_handle_never_used_for_payment():
    client = FakeIntentClient()
    confirmer = FakeConfirmer(ProcessorResult(status="succeeded", intent_id="pi_2"))
    w = _wizard(client, confirmer)
    w.select_individual(2)
    _fill(w)
    await w.go_to_step(4)
    # Changement d'email après création de l'intention
    w.update_buyer(email="new@example.com")
    state = await w.submit_payment()
    assert confirmer.calls == []
    assert state.handle.intent_id == "pi_2"
    assert client.payloads[1]["email"] == "new@example.com"
    assert state.error

    state = await w.submit_payment()
    assert state.is_confirmed


@pytest.mark.asyncio
async def test_submit_ignored_outside_payment_step():
    confirmer = FakeConfirmer(ProcessorResult(status="succeeded", intent_id="pi_1"))
    w = _wizard(confirmer=confirmer)
    w.select_tier("Gold Sponsor")
    _fill(w)
    await w.submit_payment()
    assert confirmer.calls == []


def test_unknown_tier_reports_error():
    w = _wizard()
    state = w.select_tier("Diamond Sponsor")
    assert state.offering is None
    assert state.error
