"""Assign / reassign / free parking slots and keep the board in step with the backend."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from data.api_client import ApiRequestError, SocietyApiClient, get_api_message
from data.loader import parse_floors, parse_slots
from data.normalizer import normalize_assignments, normalize_users
from engine.flash import FlashTracker
from engine.occupancy import build_occupancy_index
from models.building import Floor
from models.parking import Assignment, ParkingSlot, Resident
from config.defaults import (
    APPROVED_STATUS, MSG_SELECT_USER, MSG_ASSIGNMENT_NOT_FOUND, MSG_REQUEST_IN_PROGRESS,
    MSG_ASSIGN_FAILED, MSG_ASSIGN_OK, MSG_FREE_FAILED, MSG_FREE_OK,
)

logger = logging.getLogger(__name__)


@dataclass
class ParkingBoard:
    """Latest ground truth fetched from the backend. Always replaced wholesale."""
    floors: List[Floor] = field(default_factory=list)
    slots: List[ParkingSlot] = field(default_factory=list)
    assignments: List[Assignment] = field(default_factory=list)
    residents: List[Resident] = field(default_factory=list)

    @property
    def by_slot(self) -> Dict[int, Assignment]:
        return build_occupancy_index(self.assignments)


@dataclass
class ActionResult:
    success: bool
    message: str
    requested: bool = False  # True if a request reached the backend
    reload_error: Optional[str] = None  # Mutation accepted, board not refreshed


class AssignmentController:
    def __init__(self, client: SocietyApiClient, flash: Optional[FlashTracker] = None):
        self._client = client
        self.flash = flash or FlashTracker()
        self.board = ParkingBoard()
        self.saving = False

    # --- Loading ---

    def load_floors(self):
        self.board.floors = parse_floors(self._client.get_floors().result_list())

    def load_slots(self):
        self.board.slots = parse_slots(self._client.get_slots().result_list())

    def load_assignments(self):
        try:
            res = self._client.get_assignments()
        except ApiRequestError as e:
            logger.warning("Could not load assignments, showing none: %s", e)
            self.board.assignments = []
            return
        self.board.assignments = normalize_assignments(res.result_list(allow_bare_list=True))

    def load_residents(self):
        try:
            res = self._client.get_residents_by_status(APPROVED_STATUS)
            residents = normalize_users(res.result_list())
            if residents:
                self.board.residents = residents
                return
            logger.info("No approved residents returned; falling back to the full user list")
        except ApiRequestError as e:
            logger.warning("Approved resident list failed (%s); falling back to the full user list", e)
        try:
            res = self._client.get_users()
        except ApiRequestError as e:
            logger.warning("User list failed, showing no residents: %s", e)
            self.board.residents = []
            return
        self.board.residents = normalize_users(res.result_list())

    def load_all(self):
        """Floors and slots errors propagate; assignments and residents degrade to empty."""
        self.load_floors()
        self.load_slots()
        self.load_assignments()
        self.load_residents()

    def reload_after_mutation(self):
        self.load_assignments()
        self.load_slots()

    def _reload_quietly(self, result: ActionResult):
        # The mutation already succeeded; a failed refresh must not turn it into a failure.
        try:
            self.reload_after_mutation()
        except ApiRequestError as e:
            logger.warning("Board reload after mutation failed: %s", e)
            result.reload_error = get_api_message(e)

    # --- Transitions ---

    def assign(self, slot: Optional[ParkingSlot], resident_id: int) -> ActionResult:
        """Free -> Assigned. Also used for reassign, see reassign()."""
        if slot is None or not resident_id:
            return ActionResult(False, MSG_SELECT_USER)
        if self.saving:
            return ActionResult(False, MSG_REQUEST_IN_PROGRESS)

        # The backend has used each of these names for the same two ids.
        payload = {
            "id": 0,
            "ownerId": resident_id,
            "userId": resident_id,
            "memberId": resident_id,
            "parkingSlotId": slot.id,
            "slotId": slot.id,
        }
        self.saving = True
        try:
            res = self._client.assign_slot(payload)
            if res.failed:
                return ActionResult(False, res.res_msg or MSG_ASSIGN_FAILED, requested=True)
        except ApiRequestError as e:
            return ActionResult(False, get_api_message(e), requested=True)
        finally:
            self.saving = False

        logger.info("Assigned slot %s to resident %s", slot.id, resident_id)
        result = ActionResult(True, res.res_msg or MSG_ASSIGN_OK, requested=True)
        self.flash.flash(slot.id)
        self._reload_quietly(result)
        return result

    def reassign(self, slot: Optional[ParkingSlot], resident_id: int) -> ActionResult:
        """Assigned -> Assigned(other resident).

        Sends a second Assign for the same slot without freeing first; whether
        the backend replaces or appends the assignment row is up to the backend.
        """
        return self.assign(slot, resident_id)

    def free(self, assignment: Optional[Assignment], slot: Optional[ParkingSlot] = None) -> ActionResult:
        """Assigned -> Free. Keyed by the assignment's own id, never the slot id."""
        if assignment is None or not assignment.id:
            return ActionResult(False, MSG_ASSIGNMENT_NOT_FOUND)
        if self.saving:
            return ActionResult(False, MSG_REQUEST_IN_PROGRESS)

        self.saving = True
        try:
            res = self._client.remove_assignment(assignment.id)
            if res.failed:
                return ActionResult(False, res.res_msg or MSG_FREE_FAILED, requested=True)
        except ApiRequestError as e:
            return ActionResult(False, get_api_message(e), requested=True)
        finally:
            self.saving = False

        logger.info("Freed assignment %s (slot %s)", assignment.id, assignment.slot_id)
        result = ActionResult(True, res.res_msg or MSG_FREE_OK, requested=True)
        self.flash.flash(slot.id if slot is not None else assignment.slot_id)
        self._reload_quietly(result)
        return result
