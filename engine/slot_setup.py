"""Parking Slot Setup orchestration: floor selection, two-batch save, rename and delete."""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from data.api_client import ApiRequestError, SocietyApiClient, get_api_message
from data.loader import parse_slots, slot_to_payload
from engine.errors import ValidationError
from engine.provisioning import (
    blank_rows_message, build_rows, insert_payload, partition_for_save, update_payload,
)
from models.building import Floor
from models.parking import ParkingSlot, SlotRow
from config.defaults import (
    MSG_INSERT_FAILED, MSG_UPDATE_FAILED, MSG_DELETE_FAILED, MSG_SLOT_DELETED,
    MSG_SLOT_UPDATED, MSG_SLOT_NAME_REQUIRED, MSG_DELETE_ASSIGNED,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FloorSetupView:
    """Working set for one selected floor. Rebuilt on every selection and after every save."""
    floor: Floor
    persisted_slots: Tuple[ParkingSlot, ...] = ()
    rows: Tuple[SlotRow, ...] = ()

    @property
    def floor_id(self) -> int:
        return self.floor.id

    def with_rows(self, rows: List[SlotRow]) -> "FloorSetupView":
        return replace(self, rows=tuple(rows))


@dataclass
class SaveOutcome:
    insert_ok: bool = True
    update_ok: bool = True
    inserted: int = 0
    updated: int = 0
    messages: List[str] = field(default_factory=list)
    view: Optional[FloorSetupView] = None
    reload_error: Optional[str] = None  # Something was saved but the floor could not be re-read

    @property
    def ok(self) -> bool:
        return self.insert_ok and self.update_ok


@dataclass
class ActionOutcome:
    success: bool
    message: str


class SlotSetupController:
    def __init__(self, client: SocietyApiClient):
        self._client = client

    def select_floor(self, floor: Floor) -> FloorSetupView:
        """Fetch the floor's saved slots and lay them out over its capacity."""
        if not floor.is_parking_floor:
            return FloorSetupView(floor=floor)
        res = self._client.get_slots_by_floor(floor.id)
        saved = parse_slots(res.result_list())
        rows = build_rows(floor, saved)
        if len(saved) > floor.capacity:
            logger.warning(
                "Floor %s has %d saved slots but capacity %d; extra slots are not editable here",
                floor.id, len(saved), floor.capacity,
            )
        return FloorSetupView(floor=floor, persisted_slots=tuple(saved), rows=tuple(rows))

    def save(self, view: FloorSetupView) -> SaveOutcome:
        """Insert new rows and update saved rows as two independent requests.

        A failure in one half, including a transport error, does not undo or
        hide the other. The view is rebuilt from the backend whenever anything
        was accepted.
        """
        plan = partition_for_save(list(view.rows))
        if plan.blanks:
            raise ValidationError(blank_rows_message(plan.blanks))

        floor = view.floor
        outcome = SaveOutcome()

        if plan.to_insert:
            outcome.insert_ok = self._send_batch(
                self._client.insert_slots_bulk, insert_payload(plan.to_insert, floor.id),
                MSG_INSERT_FAILED, outcome.messages,
            )
            if outcome.insert_ok:
                outcome.inserted = len(plan.to_insert)

        if plan.to_update:
            outcome.update_ok = self._send_batch(
                self._client.update_slots_bulk, update_payload(plan.to_update, floor.id),
                MSG_UPDATE_FAILED, outcome.messages,
            )
            if outcome.update_ok:
                outcome.updated = len(plan.to_update)

        logger.info(
            "Saved floor %s: inserted=%d updated=%d insert_ok=%s update_ok=%s",
            floor.id, outcome.inserted, outcome.updated, outcome.insert_ok, outcome.update_ok,
        )

        if outcome.ok:
            outcome.messages.append(f"{len(view.rows)} slot(s) saved for {floor.floor_name}")
        if outcome.inserted or outcome.updated:
            try:
                outcome.view = self.select_floor(floor)
            except ApiRequestError as e:
                # Rows saved above still look new in the caller's view.
                logger.warning("Reload of floor %s after save failed: %s", floor.id, e)
                outcome.reload_error = get_api_message(e)
        return outcome

    def _send_batch(self, send, payload, fallback: str, messages: List[str]) -> bool:
        """One bulk request; a transport error fails this batch only."""
        try:
            res = send(payload)
        except ApiRequestError as e:
            messages.append(get_api_message(e))
            return False
        if not res.succeeded:
            messages.append(res.res_msg or fallback)
        return res.succeeded

    def rename_slot(self, slot: ParkingSlot, new_number: str) -> ActionOutcome:
        if not new_number or not new_number.strip():
            raise ValidationError(MSG_SLOT_NAME_REQUIRED)
        payload = slot_to_payload(replace(slot, slot_number=new_number.strip()))
        res = self._client.update_slot(payload)
        if res.succeeded:
            logger.info("Renamed slot %s to %r", slot.id, new_number.strip())
            return ActionOutcome(True, MSG_SLOT_UPDATED)
        return ActionOutcome(False, res.res_msg or MSG_UPDATE_FAILED)

    def delete_slot(self, slot: ParkingSlot) -> ActionOutcome:
        if slot.is_assigned:
            raise ValidationError(MSG_DELETE_ASSIGNED)
        res = self._client.delete_slot(slot.id)
        if res.succeeded:
            logger.info("Deleted slot %s", slot.id)
            return ActionOutcome(True, MSG_SLOT_DELETED)
        return ActionOutcome(False, res.res_msg or MSG_DELETE_FAILED)

    def load_all_slots(self) -> List[ParkingSlot]:
        return parse_slots(self._client.get_slots().result_list())


def filter_slots(slots: List[ParkingSlot], floors: List[Floor], query: str) -> List[ParkingSlot]:
    if not query or not query.strip():
        return slots
    q = query.strip().lower()
    floor_names = {f.id: f.floor_name for f in floors}
    return [s for s in slots if q in f"{s.slot_number} {floor_names.get(s.floor_id, '')}".lower()]
