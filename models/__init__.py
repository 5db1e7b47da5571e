from models.building import Floor
from models.parking import Assignment, ParkingSlot, Resident, SavePlan, SlotRow
