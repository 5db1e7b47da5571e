"""Slot provisioning — reconcile a floor's fixed capacity with its persisted slots."""

from dataclasses import dataclass, replace
from typing import Any, Dict, List

from models.building import Floor
from models.parking import ParkingSlot, SavePlan, SlotRow
from engine.errors import ValidationError
from config.defaults import MSG_PREFIX_REQUIRED, SLOT_NUMBER_PAD_WIDTH


@dataclass(frozen=True)
class RowCounts:
    filled: int
    saved: int
    new: int


def build_rows(floor: Floor, persisted_slots: List[ParkingSlot]) -> List[SlotRow]:
    """Exactly floor.capacity rows; row i is seeded from persisted_slots[i-1] by position.

    Slot names are the field being edited, so position is the only stable key.
    Persisted slots beyond capacity get no row.
    """
    rows = []
    for i in range(1, floor.capacity + 1):
        existing = persisted_slots[i - 1] if i <= len(persisted_slots) else None
        if existing is None:
            rows.append(SlotRow(index=i))
        else:
            rows.append(SlotRow(
                index=i,
                slot_number=existing.slot_number or "",
                existing_id=existing.id,
                is_assigned=existing.is_assigned,
            ))
    return rows


def update_row(rows: List[SlotRow], index: int, value: str) -> List[SlotRow]:
    return [replace(r, slot_number=value) if r.index == index else r for r in rows]


def format_slot_number(prefix: str, index: int) -> str:
    return f"{prefix.strip()}-{index:0{SLOT_NUMBER_PAD_WIDTH}d}"


def auto_fill(rows: List[SlotRow], prefix: str) -> List[SlotRow]:
    """Rename every row to '{prefix}-{index:02d}', regardless of prior content."""
    if not prefix or not prefix.strip():
        raise ValidationError(MSG_PREFIX_REQUIRED)
    return [replace(r, slot_number=format_slot_number(prefix, r.index)) for r in rows]


def partition_for_save(rows: List[SlotRow]) -> SavePlan:
    """Split rows into blanks, inserts (existing_id == 0) and updates (existing_id > 0).

    Blank rows land in neither batch. Partitioning is by existing_id, not by
    whether the row was edited.
    """
    plan = SavePlan()
    for r in rows:
        if r.is_blank:
            plan.blanks.append(r)
        elif r.existing_id > 0:
            plan.to_update.append(r)
        else:
            plan.to_insert.append(r)
    return plan


def blank_rows_message(blanks: List[SlotRow]) -> str:
    indexes = ", ".join(str(r.index) for r in blanks)
    return f"Slot {indexes} {'is' if len(blanks) == 1 else 'are'} empty"


def insert_payload(rows: List[SlotRow], floor_id: int) -> List[Dict[str, Any]]:
    return [{
        "id": 0,
        "slotNumber": r.slot_number.strip(),
        "floorId": floor_id,
        "isAssigned": False,
    } for r in rows]


def update_payload(rows: List[SlotRow], floor_id: int) -> List[Dict[str, Any]]:
    return [{
        "id": r.existing_id,
        "slotNumber": r.slot_number.strip(),
        "floorId": floor_id,
        "isAssigned": r.is_assigned,
    } for r in rows]


def row_counts(rows: List[SlotRow]) -> RowCounts:
    return RowCounts(
        filled=sum(1 for r in rows if not r.is_blank),
        saved=sum(1 for r in rows if r.existing_id > 0),
        new=sum(1 for r in rows if r.existing_id == 0 and not r.is_blank),
    )
