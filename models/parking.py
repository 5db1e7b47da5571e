from dataclasses import dataclass, field
from typing import List


@dataclass
class ParkingSlot:
    id: int                  # 0 = not yet persisted
    slot_number: str
    floor_id: int
    is_assigned: bool = False  # Cached by the backend; not authoritative for occupancy

    @property
    def is_persisted(self) -> bool:
        return self.id > 0


@dataclass
class Assignment:
    id: int        # The assignment's own id, required to free the slot
    slot_id: int
    user_id: int
    slot_number: str = ""
    user_name: str = ""
    floor_id: int = 0
    floor_name: str = ""
    flat_name: str = ""


@dataclass
class Resident:
    id: int
    name: str
    floor: str = ""
    flat_name: str = ""
    mobile: str = ""

    @property
    def location(self) -> str:
        return " · ".join(p for p in (self.floor, self.flat_name) if p) or "—"


@dataclass(frozen=True)
class SlotRow:
    """One editable placeholder in a floor's fixed slot capacity."""
    index: int             # 1-based position
    slot_number: str = ""
    existing_id: int = 0   # 0 = new (insert), >0 = saved (update)
    is_assigned: bool = False

    @property
    def is_blank(self) -> bool:
        return not self.slot_number.strip()


@dataclass
class SavePlan:
    to_insert: List[SlotRow] = field(default_factory=list)
    to_update: List[SlotRow] = field(default_factory=list)
    blanks: List[SlotRow] = field(default_factory=list)

    @property
    def can_save(self) -> bool:
        return not self.blanks and bool(self.to_insert or self.to_update)
