"""
Modèles des offres: palier de sponsoring (tier) ou places individuelles.

Union étiquetée (champ `kind`) plutôt qu'une structure unique à champs nullables.
Les deux variantes exposent la même projection prix / nombre de places:
- price_for(quantity)
- seat_count(quantity)
- display_name
"""
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# module daniel_award.offerings.models
VIP_ALL = "all"
SEATS_PER_TABLE = 10


class TierOffering(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["tier"] = "tier"
    name: str
    style: str
    price: int = Field(gt=0)
    tables: int = Field(default=0, ge=0)
    seats: int = Field(default=0, ge=0)
    vip: Optional[Union[Literal["all"], int]] = None
    books: int = Field(default=0, ge=0)
    host_seats: int = Field(default=0, ge=0)
    features: Tuple[str, ...] = ()
    featured: bool = False
    highlight: str = ""

    @field_validator("vip", mode="before")
    @classmethod
    def _parse_vip(cls, v):
        """
        Accepte la forme du document de contenu:
        - 'all' => VIP_ALL
        - '4' / 4 => 4
        - '' / None / 0 => None (aucun pass VIP)
        """
        if v is None:
            return None
        if isinstance(v, str):
            v = v.strip().lower()
            if not v:
                return None
            if v == VIP_ALL:
                return VIP_ALL
            v = int(v)
        if isinstance(v, int) and v <= 0:
            return None
        return v

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def vip_is_all(self) -> bool:
        return self.vip == VIP_ALL

    @property
    def vip_limit(self) -> Optional[int]:
        """Plafond fini de pass VIP (hors table d'honneur), None si aucun ou 'all'."""
        return self.vip if isinstance(self.vip, int) else None

    def price_for(self, quantity: int = 1) -> int:
        return self.price

    def seat_count(self, quantity: int = 1) -> int:
        return self.seats


class IndividualOffering(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["individual"] = "individual"
    unit_price: int = Field(gt=0)
    max_quantity: int = Field(default=20, ge=1)
    label: str = "Individual Seats"
    tagline: str = ""

    @property
    def display_name(self) -> str:
        return self.label

    def clamp(self, quantity: int) -> int:
        return max(1, min(self.max_quantity, int(quantity)))

    def price_for(self, quantity: int = 1) -> int:
        return self.clamp(quantity) * self.unit_price

    def seat_count(self, quantity: int = 1) -> int:
        return self.clamp(quantity)


Offering = Annotated[Union[TierOffering, IndividualOffering], Field(discriminator="kind")]
