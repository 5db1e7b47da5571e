"""Society REST API client: one method per endpoint, envelope parsing only. No business rules."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from config.defaults import (
    FLOOR_LIST_PATH, SLOT_LIST_PATH, SLOT_BY_FLOOR_PATH,
    SLOT_INSERT_BULK_PATH, SLOT_UPDATE_BULK_PATH, SLOT_UPDATE_PATH, SLOT_DELETE_PATH,
    ASSIGNMENT_LIST_PATH, ASSIGNMENT_CREATE_PATH, ASSIGNMENT_REMOVE_PATH,
    RESIDENTS_BY_STATUS_PATH, USER_LIST_PATH, APPROVED_STATUS,
    MSG_REQUEST_FAILED, MSG_UNKNOWN_ERROR,
)
from config.settings import ApiSettings

logger = logging.getLogger(__name__)


class ApiRequestError(Exception):
    """Transport failure or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


@dataclass
class ApiResponse:
    """The `{isSuccess?, resMsg?, result?}` envelope every endpoint returns."""
    is_success: Optional[bool] = None
    res_msg: Optional[str] = None
    result: Any = None
    status_code: Optional[int] = None
    raw: Any = None

    @classmethod
    def from_body(cls, body: Any, status_code: Optional[int] = None) -> "ApiResponse":
        if not isinstance(body, dict):
            return cls(result=None, status_code=status_code, raw=body)
        is_success = body.get("isSuccess")
        res_msg = body.get("resMsg")
        return cls(
            is_success=is_success if isinstance(is_success, bool) else None,
            res_msg=res_msg if isinstance(res_msg, str) and res_msg.strip() else None,
            result=body.get("result"),
            status_code=body.get("statusCode", status_code),
            raw=body,
        )

    @property
    def failed(self) -> bool:
        """Backend explicitly reported failure."""
        return self.is_success is False

    @property
    def succeeded(self) -> bool:
        """Backend explicitly reported success."""
        return self.is_success is True

    def result_list(self, allow_bare_list: bool = False) -> List[Any]:
        if isinstance(self.result, list):
            return self.result
        if allow_bare_list and isinstance(self.raw, list):
            return self.raw
        return []


def get_api_message(error: BaseException) -> str:
    """Best user-facing message for a failed request."""
    if isinstance(error, ApiRequestError):
        body = error.body
        if isinstance(body, dict):
            for key in ("resMsg", "message"):
                value = body.get(key)
                if isinstance(value, str) and value.strip():
                    return value
        return MSG_REQUEST_FAILED
    return str(error) or MSG_UNKNOWN_ERROR


class SocietyApiClient:
    """Thin wrapper over the society backend endpoints."""

    def __init__(
        self,
        settings: Optional[ApiSettings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings or ApiSettings()
        self._transport = transport

    @property
    def settings(self) -> ApiSettings:
        return self._settings

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse:
        if not self._settings.is_configured():
            raise ApiRequestError("API base URL not configured. Set SOCIETY_API_BASE_URL in .env.")
        url = f"{self._settings.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            with httpx.Client(timeout=self._settings.timeout, transport=self._transport) as c:
                r = c.request(method, url, json=json_body, params=params, headers=self._settings.headers())
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiRequestError(str(e) or MSG_REQUEST_FAILED) from e

        try:
            body = r.json() if r.content else None
        except ValueError:
            body = None

        if not r.is_success:
            logger.warning("%s %s returned %s", method, path, r.status_code)
            raise ApiRequestError(f"API error: {r.status_code}", status_code=r.status_code, body=body)
        return ApiResponse.from_body(body, status_code=r.status_code)

    # --- Floors ---

    def get_floors(self) -> ApiResponse:
        return self._request("GET", FLOOR_LIST_PATH)

    # --- Parking slots ---

    def get_slots(self) -> ApiResponse:
        return self._request("GET", SLOT_LIST_PATH)

    def get_slots_by_floor(self, floor_id: int) -> ApiResponse:
        return self._request("GET", SLOT_BY_FLOOR_PATH.format(floor_id=floor_id))

    def insert_slots_bulk(self, payload: List[Dict[str, Any]]) -> ApiResponse:
        return self._request("POST", SLOT_INSERT_BULK_PATH, json_body=payload)

    def update_slots_bulk(self, payload: List[Dict[str, Any]]) -> ApiResponse:
        return self._request("PUT", SLOT_UPDATE_BULK_PATH, json_body=payload)

    def update_slot(self, payload: Dict[str, Any]) -> ApiResponse:
        return self._request("PUT", SLOT_UPDATE_PATH, json_body=payload)

    def delete_slot(self, slot_id: int) -> ApiResponse:
        return self._request("DELETE", SLOT_DELETE_PATH.format(slot_id=slot_id))

    # --- Assignments ---

    def get_assignments(self) -> ApiResponse:
        return self._request("GET", ASSIGNMENT_LIST_PATH)

    def assign_slot(self, payload: Dict[str, Any]) -> ApiResponse:
        return self._request("POST", ASSIGNMENT_CREATE_PATH, json_body=payload)

    def remove_assignment(self, assignment_id: int) -> ApiResponse:
        return self._request("DELETE", ASSIGNMENT_REMOVE_PATH.format(assignment_id=assignment_id))

    # --- Residents ---

    def get_residents_by_status(self, status: str = APPROVED_STATUS) -> ApiResponse:
        return self._request("GET", RESIDENTS_BY_STATUS_PATH, params={"status": status})

    def get_users(self) -> ApiResponse:
        return self._request("GET", USER_LIST_PATH)
