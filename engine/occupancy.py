"""Occupancy index and per-floor occupancy summaries."""

from dataclasses import dataclass
from typing import Dict, List

from models.building import Floor
from models.parking import Assignment, ParkingSlot, Resident
from config.defaults import STATUS_ASSIGNED, STATUS_FREE, FLOOR_FULL_LABEL


@dataclass(frozen=True)
class FloorOccupancy:
    floor_id: int
    total: int
    used: int

    @property
    def free(self) -> int:
        return self.total - self.used

    @property
    def occupancy_pct(self) -> float:
        return self.used / self.total if self.total > 0 else 0.0

    @property
    def label(self) -> str:
        if self.total == 0:
            return ""
        return f"{self.free} free" if self.free > 0 else FLOOR_FULL_LABEL


def build_occupancy_index(assignments: List[Assignment]) -> Dict[int, Assignment]:
    """slot_id -> assignment. Uniqueness per slot is assumed; a later duplicate overwrites."""
    index: Dict[int, Assignment] = {}
    for a in assignments:
        index[a.slot_id] = a
    return index


def is_occupied(index: Dict[int, Assignment], slot: ParkingSlot) -> bool:
    # The index decides, not slot.is_assigned.
    return slot.id in index


def slot_status(index: Dict[int, Assignment], slot: ParkingSlot) -> str:
    return STATUS_ASSIGNED if is_occupied(index, slot) else STATUS_FREE


def parking_floors(floors: List[Floor]) -> List[Floor]:
    return [f for f in floors if f.is_parking_floor]


def slots_for_floor(slots: List[ParkingSlot], floor_id: int) -> List[ParkingSlot]:
    return [s for s in slots if s.floor_id == floor_id]


def floor_occupancy(
    floor: Floor,
    slots: List[ParkingSlot],
    index: Dict[int, Assignment],
) -> FloorOccupancy:
    floor_slots = slots_for_floor(slots, floor.id)
    used = sum(1 for s in floor_slots if is_occupied(index, s))
    return FloorOccupancy(floor_id=floor.id, total=len(floor_slots), used=used)


def flag_mismatches(slots: List[ParkingSlot], index: Dict[int, Assignment]) -> List[ParkingSlot]:
    """Slots whose cached is_assigned flag disagrees with the assignment table."""
    return [s for s in slots if s.is_assigned != is_occupied(index, s)]


def default_floor_id(floors: List[Floor], current: int = 0) -> int:
    candidates = parking_floors(floors)
    if any(f.id == current for f in candidates):
        return current
    return candidates[0].id if candidates else 0


def filter_residents(residents: List[Resident], query: str) -> List[Resident]:
    if not query or not query.strip():
        return residents
    q = query.strip().lower()
    return [
        r for r in residents
        if q in f"{r.name} {r.floor} {r.flat_name} {r.mobile}".lower()
    ]
