"""
Accès au catalogue des offres, construit depuis le document de contenu (daniel_award.content).
"""
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple
import logging

from pydantic import BaseModel, ConfigDict

from daniel_award.content import CONFIG
from .models import IndividualOffering, TierOffering

logger = logging.getLogger(__name__)


class Catalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    tiers: Tuple[TierOffering, ...]
    individual: IndividualOffering

    @property
    def featured(self) -> Tuple[TierOffering, ...]:
        return tuple(t for t in self.tiers if t.featured)

    @property
    def grid(self) -> Tuple[TierOffering, ...]:
        return tuple(t for t in self.tiers if not t.featured)

    def find_tier(self, name: str) -> Optional[TierOffering]:
        wanted = (name or "").strip()
        return next((t for t in self.tiers if t.name == wanted), None)


# module daniel_award.offerings.repository
def load_catalog(document: Dict[str, Any]) -> Catalog:
    """
    Construit le catalogue depuis un document de contenu.
    - Les paliers invalides font échouer le chargement (ValidationError pydantic):
      une page de vente avec un prix faux ne doit pas démarrer.
    - Les styles de palier doivent être uniques (ValueError sinon).
    """
    tiers = tuple(TierOffering(**t) for t in document.get("tiers") or [])
    styles = [t.style for t in tiers]
    if len(styles) != len(set(styles)):
        raise ValueError("Chaque palier doit avoir un style unique")
    indiv = document.get("individual") or {}
    individual = IndividualOffering(
        unit_price=indiv.get("price"),
        max_quantity=indiv.get("max", 20),
        label=indiv.get("label") or "Individual Seats",
        tagline=indiv.get("tagline") or "",
    )
    logger.debug("offerings.catalog tiers=%s individual_price=%s", len(tiers), individual.unit_price)
    return Catalog(tiers=tiers, individual=individual)


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """Catalogue de l'événement (chargé une seule fois, immuable)."""
    return load_catalog(CONFIG)


def find_tier(name: str) -> Optional[TierOffering]:
    return get_catalog().find_tier(name)


def canonical_amount(tier_name: str, seats: Any) -> Optional[int]:
    """
    Prix de référence (unités majeures) pour une inscription décrite par le client.
    - Palier connu => prix du palier
    - Libellé des places individuelles => seats * prix unitaire (seats borné à [1, max])
    - Retourne None si l'offre est inconnue ou seats illisible.
    """
    catalog = get_catalog()
    tier = catalog.find_tier(tier_name)
    if tier:
        return tier.price
    if (tier_name or "").strip() == catalog.individual.label:
        try:
            quantity = int(seats)
        except (TypeError, ValueError):
            return None
        if quantity < 1 or quantity > catalog.individual.max_quantity:
            return None
        return catalog.individual.price_for(quantity)
    return None
