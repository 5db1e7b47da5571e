from dataclasses import dataclass


@dataclass
class Floor:
    id: int
    floor_name: str
    total_flats: int = 0
    total_parking_slot: int = 0  # Authoritative slot capacity, set in Floor Master
    is_parking_floor: bool = False

    @property
    def capacity(self) -> int:
        return max(0, self.total_parking_slot)
