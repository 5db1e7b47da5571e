"""API record parsing — JSON dicts into typed model lists, and back."""

import logging
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from config.defaults import STATUS_ASSIGNED, STATUS_FREE
from models.building import Floor
from models.parking import ParkingSlot

logger = logging.getLogger(__name__)


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def parse_floor(record: Any) -> Optional[Floor]:
    if not isinstance(record, dict) or _int(record.get("id")) <= 0:
        return None
    return Floor(
        id=_int(record["id"]),
        floor_name=str(record.get("floorName") or "").strip(),
        total_flats=_int(record.get("totalFlats")),
        total_parking_slot=_int(record.get("totalParkingSlot")),
        is_parking_floor=_bool(record.get("isParkingFloor")),
    )


def parse_slot(record: Any) -> Optional[ParkingSlot]:
    if not isinstance(record, dict) or _int(record.get("id")) <= 0:
        return None
    return ParkingSlot(
        id=_int(record["id"]),
        slot_number=str(record.get("slotNumber") or ""),
        floor_id=_int(record.get("floorId")),
        is_assigned=_bool(record.get("isAssigned")),
    )


def parse_floors(records: Iterable[Any]) -> List[Floor]:
    """Convert Floor/GetAll records into Floor objects, skipping unusable ones."""
    floors = []
    for record in records:
        floor = parse_floor(record)
        if floor is None:
            logger.warning("Skipping floor record without an id: %r", record)
            continue
        floors.append(floor)
    return floors


def parse_slots(records: Iterable[Any]) -> List[ParkingSlot]:
    """Convert ParkingSlot records into ParkingSlot objects, preserving backend order."""
    slots = []
    for record in records:
        slot = parse_slot(record)
        if slot is None:
            logger.warning("Skipping slot record without an id: %r", record)
            continue
        slots.append(slot)
    return slots


def slot_to_payload(slot: ParkingSlot) -> Dict[str, Any]:
    return {
        "id": slot.id,
        "slotNumber": slot.slot_number,
        "floorId": slot.floor_id,
        "isAssigned": slot.is_assigned,
    }


def slots_dataframe(slots: List[ParkingSlot], floors: List[Floor]) -> pd.DataFrame:
    """Tabular view of slots for the All Slots listing."""
    floor_names = {f.id: f.floor_name for f in floors}
    rows = [{
        "ID": s.id,
        "Slot": s.slot_number,
        "Floor": floor_names.get(s.floor_id, "—"),
        "Status": STATUS_ASSIGNED if s.is_assigned else STATUS_FREE,
    } for s in slots]
    return pd.DataFrame(rows, columns=["ID", "Slot", "Floor", "Status"])
