"""Error types shared by the server and the client.

Every error the API returns is a ThermostatAPIError. The server renders it as
``{"code": ..., "message": ..., "description": ...}`` with ``code`` as the HTTP
status, so the same payload shape is used for all failures.
"""
from typing import Any, Dict, Optional


class ThermostatAPIError(Exception):
    """An API error with a machine code, a short message and a description."""

    code = 500
    message = "Internal Server Error"

    def __init__(self, description: str = "", message: Optional[str] = None, code: Optional[int] = None):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        self.description = description
        super().__init__(f"{self.code} {self.message}: {description}")

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "description": self.description}


class BadRequest(ThermostatAPIError):
    code = 400
    message = "Bad Request"


class NotFound(ThermostatAPIError):
    code = 404
    message = "Not Found"


class ThermostatNotFound(NotFound):
    """No thermostat exists for the requested id."""

    def __init__(self, thermostat_id: int):
        self.thermostat_id = thermostat_id
        super().__init__(f"No thermostat found for id: {thermostat_id}")


class ClientError(Exception):
    """Raised by ThermostatClient when the server answers with an error status."""

    def __init__(self, status_code: int, error: Optional[Dict[str, Any]] = None, text: str = ""):
        self.status_code = status_code
        self.error = error or {}
        self.message = self.error.get("message") or text or f"HTTP {status_code}"
        self.description = self.error.get("description", "")
        detail = f"{status_code} {self.message}"
        if self.description:
            detail += f": {self.description}"
        super().__init__(detail)
