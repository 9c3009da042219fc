"""
Modèles d'entrée/sortie de la feature 'payments'.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaymentRequest(BaseModel):
    """
    Corps de POST /api/payment (noms JSON en camelCase, envoyés par l'assistant d'inscription).
    - amount reste brut (Any): sa validation relève du service (InvalidAmountError, 400),
      pas d'une erreur 422 générique.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    amount: Any = None
    tier: str = ""
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: str = ""
    org: str = ""
    seats: Any = 0
    guests: str = ""

    @field_validator("tier", "first_name", "last_name", "email", "phone", "org", "guests", mode="before")
    @classmethod
    def _as_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, (str, int, float)):
            return str(v).strip()
        raise ValueError("valeur texte attendue")


class IntentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(alias="clientSecret")
    intent_id: str = Field(alias="intentId")


class ConfirmationRecord(BaseModel):
    """
    Confirmation de paiement observée après vérification de la signature du webhook.
    Seule source de vérité pour "paiement réussi" (jamais l'état local du client).
    """
    event_id: str = ""
    intent_id: str = ""
    amount: int = 0
    currency: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    tier: str = ""
    seats: str = ""

    @property
    def buyer_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def amount_major(self) -> str:
        return f"{self.amount / 100:.2f}"
