"""Default configuration constants for the Society Parking Console."""

# REST endpoints (relative to the API base URL)
FLOOR_LIST_PATH = "/Floor/GetAll"
SLOT_LIST_PATH = "/ParkingSlot/GetAll"
SLOT_BY_FLOOR_PATH = "/ParkingSlot/GetByFloor/{floor_id}"
SLOT_INSERT_BULK_PATH = "/ParkingSlot/InsertBulk"
SLOT_UPDATE_BULK_PATH = "/ParkingSlot/UpdateBulk"
SLOT_UPDATE_PATH = "/ParkingSlot/Update"
SLOT_DELETE_PATH = "/ParkingSlot/Delete/{slot_id}"
ASSIGNMENT_LIST_PATH = "/ParkingAssignment/GetAll"
ASSIGNMENT_CREATE_PATH = "/ParkingAssignment/Assign"
ASSIGNMENT_REMOVE_PATH = "/ParkingAssignment/Remove/{assignment_id}"
RESIDENTS_BY_STATUS_PATH = "/AdminUserApprove/GetUsersByStatus"
USER_LIST_PATH = "/UserMaster/GetAll"

# Resident approval status used as the primary resident source
APPROVED_STATUS = "APPROVED"

# HTTP
DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_APP_NAME = "Society 365"

# Auto-fill: "{prefix}-{index}" with the index zero-padded to this width
SLOT_NUMBER_PAD_WIDTH = 2

# Cosmetic highlight after a successful assign/free. Expiry is checked when the
# page renders, so in Streamlit it lasts until the next rerun past this window.
FLASH_DURATION_SECONDS = 0.6

# Slot status labels
STATUS_ASSIGNED = "Assigned"
STATUS_FREE = "Free"
FLOOR_FULL_LABEL = "Full"

# User-facing messages
MSG_SELECT_USER = "Please select a user"
MSG_ASSIGNMENT_NOT_FOUND = "Assignment not found"
MSG_REQUEST_IN_PROGRESS = "Another request is in progress"
MSG_ASSIGN_FAILED = "Assignment failed"
MSG_ASSIGN_OK = "Parking assigned!"
MSG_FREE_FAILED = "Failed to free slot"
MSG_FREE_OK = "Slot freed!"
MSG_PREFIX_REQUIRED = "Enter a prefix first"
MSG_INSERT_FAILED = "Insert failed"
MSG_UPDATE_FAILED = "Update failed"
MSG_DELETE_FAILED = "Delete failed"
MSG_SLOT_DELETED = "Slot deleted"
MSG_SLOT_UPDATED = "Slot updated"
MSG_SLOT_NAME_REQUIRED = "Slot number cannot be empty"
MSG_DELETE_ASSIGNED = "Cannot delete an assigned slot"
MSG_REQUEST_FAILED = "Request failed"
MSG_UNKNOWN_ERROR = "Something went wrong"
