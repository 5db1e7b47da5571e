"""Tests for API record parsing and pre-save validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from data.loader import parse_floors, parse_slots, slot_to_payload, slots_dataframe
from data.validator import validate_setup_view
from engine.provisioning import build_rows
from engine.slot_setup import FloorSetupView
from models.building import Floor
from models.parking import ParkingSlot, SlotRow


def make_view(floor, slots=(), rows=None):
    if rows is None:
        rows = build_rows(floor, list(slots))
    return FloorSetupView(floor=floor, persisted_slots=tuple(slots), rows=tuple(rows))


class TestParsing:
    def test_parse_floors(self):
        floors = parse_floors([
            {"id": 1, "floorName": " Basement 1 ", "totalParkingSlot": "12", "isParkingFloor": "true"},
            {"id": 2, "floorName": "Ground", "totalFlats": 8, "isParkingFloor": False},
            {"floorName": "no id"},
        ])
        assert [f.id for f in floors] == [1, 2]
        assert floors[0].floor_name == "Basement 1"
        assert floors[0].capacity == 12
        assert floors[0].is_parking_floor
        assert not floors[1].is_parking_floor

    def test_parse_slots_keeps_order(self):
        slots = parse_slots([
            {"id": 7, "slotNumber": "B", "floorId": 1, "isAssigned": True},
            {"id": 3, "slotNumber": "A", "floorId": 1},
            None,
        ])
        assert [s.id for s in slots] == [7, 3]
        assert slots[0].is_assigned
        assert slots[1].is_assigned is False

    def test_slot_payload(self):
        assert slot_to_payload(ParkingSlot(4, "C-1", 2, True)) == {
            "id": 4, "slotNumber": "C-1", "floorId": 2, "isAssigned": True,
        }

    def test_slots_dataframe(self):
        df = slots_dataframe(
            [ParkingSlot(1, "A", 1, True), ParkingSlot(2, "B", 9)],
            [Floor(1, "Basement 1", 0, 2, True)],
        )
        assert list(df.columns) == ["ID", "Slot", "Floor", "Status"]
        assert list(df["Status"]) == ["Assigned", "Free"]
        assert df.iloc[1]["Floor"] == "—"

    def test_empty_dataframe_has_columns(self):
        assert list(slots_dataframe([], []).columns) == ["ID", "Slot", "Floor", "Status"]


class TestValidateSetupView:
    def test_complete_rows_are_valid(self):
        floor = Floor(1, "B1", 0, 2, True)
        view = make_view(floor, rows=[SlotRow(1, "A-01"), SlotRow(2, "A-02")])
        result = validate_setup_view(view)
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_blank_rows_are_errors(self):
        floor = Floor(1, "B1", 0, 3, True)
        result = validate_setup_view(make_view(floor, rows=[SlotRow(1, "A"), SlotRow(2), SlotRow(3)]))
        assert not result.is_valid
        assert result.errors == ["Slot 2, 3 are empty"]

    def test_non_parking_and_zero_capacity(self):
        assert not validate_setup_view(make_view(Floor(1, "Ground", 8, 0, False))).is_valid
        zero = validate_setup_view(make_view(Floor(2, "B2", 0, 0, True)))
        assert not zero.is_valid
        assert "no parking capacity" in zero.errors[0]

    def test_duplicates_warn_case_insensitively(self):
        floor = Floor(1, "B1", 0, 3, True)
        view = make_view(floor, rows=[SlotRow(1, "A-01"), SlotRow(2, "a-01"), SlotRow(3, "A-03")])
        result = validate_setup_view(view)
        assert result.is_valid
        assert len(result.warnings) == 1
        assert "A-01" in result.warnings[0]

    def test_overflow_warns(self):
        floor = Floor(1, "B1", 0, 1, True)
        slots = [ParkingSlot(1, "A", 1), ParkingSlot(2, "B", 1)]
        result = validate_setup_view(make_view(floor, slots))
        assert result.is_valid
        assert any("exceed" in w for w in result.warnings)
