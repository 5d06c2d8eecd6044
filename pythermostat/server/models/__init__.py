"""
Data Models for pyThermostat Server

Pydantic models used as data transfer objects for API requests and
responses and as the records held by the store.

Model Overview:

    Thermostat (Record)
        └── Full state of one thermostat
            - id, name, mode, fan
            - set points and the derived current/previous temperature
            - lastChanged timestamp

    UpdateRequest (Partial Update)
        └── Fields a client wants to change (PUT) or set (POST)
            - Omitted, null, 0 and "" all mean "not provided"

    ErrorResponse (Errors)
        └── {code, message, description} body of every failure

JSON Names:

    Attributes are snake_case in Python and camelCase on the wire
    (cool_set_point <-> coolSetPoint). Both names are accepted when building
    a model; responses always use the camelCase aliases.
"""
from .thermostat import (
    FAN_MODES,
    FIELD_NAMES,
    OPERATING_MODES,
    ErrorResponse,
    Thermostat,
    UpdateRequest,
)

__all__ = [
    "FAN_MODES",
    "FIELD_NAMES",
    "OPERATING_MODES",
    "ErrorResponse",
    "Thermostat",
    "UpdateRequest",
]
