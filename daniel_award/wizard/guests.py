"""
Grille des invités: une entrée par place, clé (table, numéro de place).

- La table d'honneur est une variante distincte (HostTable.HOST), pas une chaîne magique.
- Places de la table d'honneur: VIP implicite.
- Palier VIP 'all' (ou plafond >= nombre de places): toutes les places sont VIP implicites,
  aucune case à cocher.
- Plafond VIP fini N: au plus N places (hors table d'honneur) cochées; au-delà la case est
  désactivée et cocher est sans effet.
"""
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Set, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from daniel_award.offerings import SEATS_PER_TABLE, IndividualOffering, TierOffering


class HostTable(str, Enum):
    HOST = "host"


HOST = HostTable.HOST
TableId = Union[HostTable, int]


class SeatKey(NamedTuple):
    table: TableId
    seat: int


class GuestSeat(BaseModel):
    model_config = ConfigDict(frozen=True)

    table: TableId
    seat: int = Field(ge=1)
    first: str = ""
    last: str = ""
    vip_checked: bool = False
    vip_selectable: bool = False
    implicit_vip: bool = False

    @property
    def key(self) -> SeatKey:
        return SeatKey(self.table, self.seat)

    @property
    def is_host(self) -> bool:
        return self.table == HOST

    @property
    def is_vip(self) -> bool:
        return self.implicit_vip or self.vip_checked

    @property
    def has_name(self) -> bool:
        return bool(self.first or self.last)


class GuestGrid(BaseModel):
    model_config = ConfigDict(frozen=True)

    seats: Tuple[GuestSeat, ...] = ()
    vip_limit: Optional[int] = None
    vip_all: bool = False

    @property
    def layout(self) -> Tuple[SeatKey, ...]:
        return tuple(s.key for s in self.seats)

    def by_key(self) -> Dict[SeatKey, GuestSeat]:
        return {s.key: s for s in self.seats}

    def get(self, key: SeatKey) -> Optional[GuestSeat]:
        return self.by_key().get(SeatKey(*key))

    @property
    def host_seats(self) -> List[GuestSeat]:
        return [s for s in self.seats if s.is_host]

    @property
    def table_seats(self) -> List[GuestSeat]:
        return [s for s in self.seats if not s.is_host]

    @property
    def vip_used(self) -> int:
        """Pass VIP cochés (hors table d'honneur et hors VIP implicite)."""
        return sum(1 for s in self.seats if s.vip_checked)

    @property
    def vip_count(self) -> int:
        return sum(1 for s in self.seats if s.is_vip)

    def can_check(self, key: SeatKey) -> bool:
        seat = self.get(key)
        if seat is None or not seat.vip_selectable:
            return False
        if seat.vip_checked:
            return True
        return self.vip_limit is not None and self.vip_used < self.vip_limit

    def disabled_keys(self) -> Set[SeatKey]:
        """Cases VIP désactivées: non cochées alors que le plafond est atteint."""
        if self.vip_limit is None or self.vip_used < self.vip_limit:
            return set()
        return {s.key for s in self.seats if s.vip_selectable and not s.vip_checked}


def _table_groups(tier: TierOffering) -> List[Tuple[int, int]]:
    if tier.tables:
        return [(t, SEATS_PER_TABLE) for t in range(tier.tables)]
    # Palier sans table mais avec des places (ex: Bronze, 4 places): un seul groupe
    return [(0, tier.seats)] if tier.seats else []


def build_grid(
    offering: Optional[Union[TierOffering, IndividualOffering]],
    quantity: int = 1,
    previous: Optional[GuestGrid] = None,
) -> GuestGrid:
    """
    Construit la grille vide correspondant à l'offre active.
    - Palier: places de la table d'honneur d'abord (VIP implicite), puis 10 places par table.
    - Places individuelles: `quantity` places sur une seule table, sans VIP.
    - previous: reprend noms et cases cochées des places encore présentes (plafond respecté).
    """
    if offering is None:
        return GuestGrid()

    seats: List[GuestSeat] = []
    vip_limit: Optional[int] = None
    vip_all = False
    if isinstance(offering, TierOffering):
        for s in range(1, offering.host_seats + 1):
            seats.append(GuestSeat(table=HOST, seat=s, implicit_vip=True))
        groups = _table_groups(offering)
        table_total = sum(count for _, count in groups)
        limit = offering.vip_limit
        vip_all = offering.vip_is_all or (limit is not None and limit >= table_total)
        selectable = limit is not None and not vip_all
        vip_limit = limit if selectable else None
        for table, count in groups:
            for s in range(1, count + 1):
                seats.append(GuestSeat(table=table, seat=s, implicit_vip=vip_all, vip_selectable=selectable))
    else:
        for s in range(1, offering.clamp(quantity) + 1):
            seats.append(GuestSeat(table=0, seat=s))

    if previous is not None:
        seats = _carry_over(seats, previous, vip_limit)
    return GuestGrid(seats=tuple(seats), vip_limit=vip_limit, vip_all=vip_all)


def _carry_over(seats: List[GuestSeat], previous: GuestGrid, vip_limit: Optional[int]) -> List[GuestSeat]:
    old = previous.by_key()
    used = 0
    carried: List[GuestSeat] = []
    for seat in seats:
        prior = old.get(seat.key)
        if prior is None:
            carried.append(seat)
            continue
        checked = (
            seat.vip_selectable
            and prior.vip_checked
            and vip_limit is not None
            and used < vip_limit
        )
        if checked:
            used += 1
        carried.append(seat.model_copy(update={"first": prior.first, "last": prior.last, "vip_checked": checked}))
    return carried


def set_guest_name(
    grid: GuestGrid,
    key: SeatKey,
    first: Optional[str] = None,
    last: Optional[str] = None,
) -> GuestGrid:
    """Renseigne le nom d'une place (clé inconnue: grille inchangée)."""
    key = SeatKey(*key)
    update = {}
    if first is not None:
        update["first"] = first.strip()
    if last is not None:
        update["last"] = last.strip()
    if grid.get(key) is None or not update:
        return grid
    seats = tuple(s.model_copy(update=update) if s.key == key else s for s in grid.seats)
    return grid.model_copy(update={"seats": seats})


def toggle_vip(grid: GuestGrid, key: SeatKey, checked: bool) -> GuestGrid:
    """
    Coche/décoche le pass VIP d'une place.
    - Cocher au-delà du plafond, ou une place sans case (hôte, VIP 'all', individuel): sans effet.
    """
    key = SeatKey(*key)
    seat = grid.get(key)
    if seat is None or not seat.vip_selectable or seat.vip_checked == bool(checked):
        return grid
    if checked and not grid.can_check(key):
        return grid
    seats = tuple(s.model_copy(update={"vip_checked": bool(checked)}) if s.key == key else s for s in grid.seats)
    return grid.model_copy(update={"seats": seats})
