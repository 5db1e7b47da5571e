"""Pre-save checks for a floor's slot rows."""

from collections import Counter
from dataclasses import dataclass, field
from typing import List

from engine.provisioning import blank_rows_message, partition_for_save
from engine.slot_setup import FloorSetupView


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def validate_setup_view(view: FloorSetupView) -> ValidationResult:
    result = ValidationResult()
    floor = view.floor

    if not floor.is_parking_floor:
        result.is_valid = False
        result.errors.append(f"{floor.floor_name} is not a parking floor.")
        return result

    if floor.capacity == 0:
        result.is_valid = False
        result.errors.append(
            f"{floor.floor_name} has no parking capacity. Set Total Parking Slots in Floor Master."
        )
        return result

    plan = partition_for_save(list(view.rows))
    if plan.blanks:
        result.is_valid = False
        result.errors.append(blank_rows_message(plan.blanks))

    # Backend uniqueness is not known, so duplicates only warn.
    filled = [r.slot_number.strip() for r in view.rows if not r.is_blank]
    names = Counter(n.lower() for n in filled)
    dupes = sorted({n for n in filled if names[n.lower()] > 1}, key=str.lower)
    if dupes:
        result.warnings.append(f"Duplicate slot numbers on this floor: {', '.join(dupes)}")

    extra = len(view.persisted_slots) - floor.capacity
    if extra > 0:
        result.warnings.append(
            f"{extra} saved slot(s) exceed this floor's capacity of {floor.capacity} "
            "and are only listed under All Slots."
        )
    return result
