"""Canonicalize backend records whose field names drift between endpoints.

Each canonical field maps to an ordered tuple of accepted wire keys; the
first key holding a usable value wins. Records missing a required id are
dropped (``None``), never defaulted. Nothing here raises.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from models.parking import Assignment, Resident

logger = logging.getLogger(__name__)

# Bump when an alias is added or reordered.
ALIAS_TABLE_VERSION = 2

# GET /ParkingAssignment/GetAll
ASSIGNMENT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "id":          ("id", "assignmentId", "parkingAssignmentId"),
    "slot_id":     ("slotId", "parkingSlotId", "slotMasterId"),
    "user_id":     ("userId", "memberId", "residentId", "ownerId"),
    "slot_number": ("slotNumber", "parkingSlot", "slotName"),
    "user_name":   ("userName", "name", "memberName", "ownerName", "residentName"),
    "floor_id":    ("floorId",),
    "floor_name":  ("floorName",),
    "flat_name":   ("flatName", "flat"),
}

# GET /AdminUserApprove/GetUsersByStatus and GET /UserMaster/GetAll
RESIDENT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "id":        ("id", "userId", "memberId", "ownerId", "residentId"),
    "name":      ("name", "fullName", "userName", "ownerName", "residentName", "memberName"),
    "floor":     ("floor", "floorName"),
    "flat_name": ("flatName", "flat"),
    "mobile":    ("mobile", "mobileNo", "phone"),
}


def _to_int(value: float) -> int:
    return int(value) if float(value).is_integer() else 0


def read_number(raw: Mapping[str, Any], keys: Iterable[str]) -> int:
    """First numeric value (native or numeric-looking string) among keys, else 0.

    Every field read this way is an integer id, so a fractional value such as
    5.5 or "5.5" reads as 0 and the record is dropped rather than truncated.
    """
    for key in keys:
        value = raw.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            return _to_int(value)
        if isinstance(value, str) and value.strip():
            try:
                return _to_int(float(value.strip()))
            except ValueError:
                continue
    return 0


def read_string(raw: Mapping[str, Any], keys: Iterable[str]) -> str:
    """First non-blank string among keys, else ''."""
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return ""


def normalize_assignment(raw: Any) -> Optional[Assignment]:
    if not isinstance(raw, Mapping):
        return None
    f = ASSIGNMENT_FIELDS
    slot_id = read_number(raw, f["slot_id"])
    user_id = read_number(raw, f["user_id"])
    if not slot_id or not user_id:
        return None
    return Assignment(
        id=read_number(raw, f["id"]),
        slot_id=slot_id,
        user_id=user_id,
        slot_number=read_string(raw, f["slot_number"]),
        user_name=read_string(raw, f["user_name"]),
        floor_id=read_number(raw, f["floor_id"]),
        floor_name=read_string(raw, f["floor_name"]),
        flat_name=read_string(raw, f["flat_name"]),
    )


def normalize_user(raw: Any) -> Optional[Resident]:
    if not isinstance(raw, Mapping):
        return None
    f = RESIDENT_FIELDS
    user_id = read_number(raw, f["id"])
    name = read_string(raw, f["name"])
    if not user_id or not name:
        return None
    return Resident(
        id=user_id,
        name=name,
        floor=read_string(raw, f["floor"]),
        flat_name=read_string(raw, f["flat_name"]),
        mobile=read_string(raw, f["mobile"]),
    )


def normalize_assignments(rows: Iterable[Any]) -> List[Assignment]:
    rows = list(rows)
    parsed = [a for a in (normalize_assignment(r) for r in rows) if a is not None]
    if len(parsed) < len(rows):
        logger.debug("Dropped %d unusable assignment record(s)", len(rows) - len(parsed))
    return parsed


def normalize_users(rows: Iterable[Any]) -> List[Resident]:
    rows = list(rows)
    parsed = [u for u in (normalize_user(r) for r in rows) if u is not None]
    if len(parsed) < len(rows):
        logger.debug("Dropped %d unusable resident record(s)", len(rows) - len(parsed))
    return parsed
