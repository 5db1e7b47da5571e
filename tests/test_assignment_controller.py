"""Tests for assign / reassign / free and board loading."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import httpx
import pytest

from conftest import ok, fail
from data.api_client import ApiRequestError
from models.parking import Assignment, ParkingSlot
from engine.assignment_controller import AssignmentController
from engine.flash import FlashTracker

ASSIGN = "/ParkingAssignment/Assign"
ASSIGNMENTS = "/ParkingAssignment/GetAll"
SLOTS = "/ParkingSlot/GetAll"


class FrozenClock:
    def __call__(self):
        return 50.0


def make_controller(client):
    return AssignmentController(client, flash=FlashTracker(clock=FrozenClock()))


def make_slot(slot_id=5, floor_id=1):
    return ParkingSlot(slot_id, f"A-{slot_id:02d}", floor_id)


def route_reload(backend, assignments=None):
    backend.on("GET", ASSIGNMENTS, ok(assignments or []))
    backend.on("GET", SLOTS, ok([{"id": 5, "slotNumber": "A-05", "floorId": 1, "isAssigned": True}]))


class TestAssignGuards:
    def test_no_resident_selected_sends_nothing(self, backend, client):
        result = make_controller(client).assign(make_slot(), 0)
        assert not result.success
        assert result.message == "Please select a user"
        assert not result.requested
        assert backend.requests == []

    def test_no_slot_sends_nothing(self, backend, client):
        result = make_controller(client).assign(None, 9)
        assert result.message == "Please select a user"
        assert backend.requests == []

    def test_overlapping_request_rejected(self, backend, client):
        controller = make_controller(client)
        controller.saving = True
        result = controller.assign(make_slot(), 9)
        assert result.message == "Another request is in progress"
        assert backend.requests == []


class TestAssign:
    def test_payload_carries_every_id_alias(self, backend, client):
        backend.on("POST", ASSIGN, ok())
        route_reload(backend)
        make_controller(client).assign(make_slot(5), 9)
        body = backend.calls("POST", ASSIGN)[0].body
        assert body == {
            "id": 0, "ownerId": 9, "userId": 9, "memberId": 9,
            "parkingSlotId": 5, "slotId": 5,
        }

    def test_success_reloads_and_flashes(self, backend, client):
        backend.on("POST", ASSIGN, ok())
        route_reload(backend, [{"id": 70, "slotId": 5, "userId": 9}])
        controller = make_controller(client)

        result = controller.assign(make_slot(5), 9)

        assert result.success
        assert result.message == "Parking assigned!"
        assert controller.board.by_slot[5].id == 70
        assert [s.id for s in controller.board.slots] == [5]
        assert controller.flash.is_flashing(5)
        assert controller.saving is False

    def test_backend_message_preferred(self, backend, client):
        backend.on("POST", ASSIGN, ok(msg="Slot A-05 assigned"))
        route_reload(backend)
        result = make_controller(client).assign(make_slot(5), 9)
        assert result.message == "Slot A-05 assigned"

    def test_failure_does_not_reload(self, backend, client):
        backend.on("POST", ASSIGN, fail("Resident already has a slot"))
        controller = make_controller(client)

        result = controller.assign(make_slot(5), 9)

        assert not result.success
        assert result.requested
        assert result.message == "Resident already has a slot"
        assert backend.calls("GET") == []
        assert not controller.flash.is_flashing(5)
        assert controller.saving is False

    def test_failure_without_message(self, backend, client):
        backend.on("POST", ASSIGN, fail())
        result = make_controller(client).assign(make_slot(5), 9)
        assert result.message == "Assignment failed"

    def test_transport_error_becomes_message(self, backend, client):
        backend.on("POST", ASSIGN, error=httpx.ConnectError("connection refused"))
        controller = make_controller(client)
        result = controller.assign(make_slot(5), 9)
        assert not result.success
        assert result.message
        assert controller.saving is False

    def test_http_error_uses_body_message(self, backend, client):
        backend.on("POST", ASSIGN, {"isSuccess": False, "resMsg": "Unauthorized"}, status=401)
        result = make_controller(client).assign(make_slot(5), 9)
        assert result.message == "Unauthorized"

    def test_reload_failure_does_not_undo_success(self, backend, client):
        backend.on("POST", ASSIGN, ok())
        backend.on("GET", ASSIGNMENTS, ok([{"id": 70, "slotId": 5, "userId": 9}]))
        backend.on("GET", SLOTS, {}, status=500)
        controller = make_controller(client)

        result = controller.assign(make_slot(5), 9)

        assert result.success
        assert result.message == "Parking assigned!"
        assert result.reload_error == "Request failed"
        assert controller.flash.is_flashing(5)
        assert controller.saving is False
        assert len(backend.calls("POST", ASSIGN)) == 1

    def test_reassign_sends_second_assign_without_free(self, backend, client):
        backend.on("POST", ASSIGN, ok())
        route_reload(backend)
        controller = make_controller(client)
        controller.assign(make_slot(5), 9)
        controller.reassign(make_slot(5), 12)
        assigns = backend.calls("POST", ASSIGN)
        assert [c.body["userId"] for c in assigns] == [9, 12]
        assert backend.calls("DELETE") == []


class TestFree:
    def test_missing_assignment_id_sends_nothing(self, backend, client):
        controller = make_controller(client)
        for assignment in (None, Assignment(0, 5, 9)):
            result = controller.free(assignment)
            assert not result.success
            assert result.message == "Assignment not found"
        assert backend.requests == []

    def test_free_uses_assignment_id(self, backend, client):
        backend.on("DELETE", "/ParkingAssignment/Remove/70", ok())
        route_reload(backend)
        controller = make_controller(client)

        result = controller.free(Assignment(70, 5, 9), make_slot(5))

        assert result.success
        assert result.message == "Slot freed!"
        assert len(backend.calls("DELETE", "/ParkingAssignment/Remove/70")) == 1
        assert controller.flash.is_flashing(5)

    def test_free_reload_failure_still_succeeds(self, backend, client):
        backend.on("DELETE", "/ParkingAssignment/Remove/70", ok())
        backend.on("GET", ASSIGNMENTS, ok([]))
        backend.on("GET", SLOTS, {}, status=500)

        result = make_controller(client).free(Assignment(70, 5, 9))

        assert result.success
        assert result.message == "Slot freed!"
        assert result.reload_error == "Request failed"

    def test_free_failure(self, backend, client):
        backend.on("DELETE", "/ParkingAssignment/Remove/70", fail())
        result = make_controller(client).free(Assignment(70, 5, 9))
        assert not result.success
        assert result.message == "Failed to free slot"
        assert backend.calls("GET") == []


class TestLoading:
    def test_load_all(self, backend, client):
        backend.on("GET", "/Floor/GetAll", ok([
            {"id": 1, "floorName": "Basement 1", "totalParkingSlot": 2, "isParkingFloor": True},
        ]))
        route_reload(backend, [{"assignmentId": 70, "parkingSlotId": 5, "ownerId": 9}])
        backend.on("GET", "/AdminUserApprove/GetUsersByStatus", ok([{"id": 9, "name": "Anita"}]))

        controller = make_controller(client)
        controller.load_all()

        board = controller.board
        assert [f.id for f in board.floors] == [1]
        assert board.by_slot[5].user_id == 9
        assert [r.name for r in board.residents] == ["Anita"]
        assert backend.calls("GET", "/AdminUserApprove/GetUsersByStatus")[0].params == {"status": "APPROVED"}
        assert backend.calls("GET", "/UserMaster/GetAll") == []

    def test_residents_fall_back_to_user_list(self, backend, client):
        backend.on("GET", "/AdminUserApprove/GetUsersByStatus", ok([]))
        backend.on("GET", "/UserMaster/GetAll", ok([{"userId": 3, "fullName": "Kiran"}]))
        controller = make_controller(client)
        controller.load_residents()
        assert [r.id for r in controller.board.residents] == [3]

    def test_residents_fall_back_after_error(self, backend, client):
        backend.on("GET", "/AdminUserApprove/GetUsersByStatus", {}, status=500)
        backend.on("GET", "/UserMaster/GetAll", ok([{"id": 3, "name": "Kiran"}]))
        controller = make_controller(client)
        controller.load_residents()
        assert [r.id for r in controller.board.residents] == [3]

    def test_residents_empty_when_both_fail(self, backend, client):
        controller = make_controller(client)
        controller.load_residents()
        assert controller.board.residents == []

    def test_assignment_load_failure_shows_none(self, backend, client):
        controller = make_controller(client)
        controller.board.assignments = [Assignment(1, 2, 3)]
        controller.load_assignments()
        assert controller.board.assignments == []

    def test_assignments_accept_bare_list(self, backend, client):
        backend.on("GET", ASSIGNMENTS, [{"id": 1, "slotId": 2, "userId": 3}])
        controller = make_controller(client)
        controller.load_assignments()
        assert [a.slot_id for a in controller.board.assignments] == [2]

    def test_floor_load_error_propagates(self, backend, client):
        backend.on("GET", "/Floor/GetAll", {}, status=500)
        with pytest.raises(ApiRequestError):
            make_controller(client).load_floors()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
