"""Pydantic models for thermostat records, update requests and errors."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

OPERATING_MODES = ("cool", "heat", "off")
FAN_MODES = ("auto", "on")

OperatingMode = Literal["cool", "heat", "off"]
FanMode = Literal["auto", "on"]

# JSON property name -> model attribute, for the fields a client may read one at a time
FIELD_NAMES = {
    "name": "name",
    "currentTemp": "current_temp",
    "mode": "mode",
    "coolSetPoint": "cool_set_point",
    "heatSetPoint": "heat_set_point",
    "fan": "fan",
}


class Thermostat(BaseModel):
    """State of a single thermostat.

    Records are frozen. The store builds a new instance for every change and
    swaps it into its map, so a record handed to a request stays consistent
    while it is being serialized.

    Attributes:
        id: Unique identifier, assigned by the store on creation
        name: Display name
        current_temp: Midpoint of the two set points (read-only over the API)
        previous_temp: current_temp before the last change that moved it
        mode: Operating mode - heat, cool or off
        cool_set_point: Target temperature when cooling (F)
        heat_set_point: Target temperature when heating (F)
        fan: Fan mode - auto or on
        last_changed: Time of the last create or update (UTC)
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    current_temp: int = Field(default=0, alias="currentTemp")
    previous_temp: int = Field(default=0, alias="previousTemp")
    mode: OperatingMode
    cool_set_point: int = Field(alias="coolSetPoint")
    heat_set_point: int = Field(alias="heatSetPoint")
    fan: FanMode
    last_changed: datetime = Field(alias="lastChanged")


class UpdateRequest(BaseModel):
    """Desired thermostat state sent to PUT and POST /thermostats.

    Every field is optional and None means "not provided": keep the current
    value on update, use the default on create. Zero and empty string are
    read as "not provided" too, matching what clients of the API already
    send, so a field can not be cleared to 0 or "" over the wire.

    current_temp is accepted only so validation can reject it with a proper
    error; it is never written.
    """
    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    current_temp: Optional[int] = Field(default=None, alias="currentTemp")
    mode: Optional[str] = None
    cool_set_point: Optional[int] = Field(default=None, alias="coolSetPoint")
    heat_set_point: Optional[int] = Field(default=None, alias="heatSetPoint")
    fan: Optional[str] = None

    @field_validator("*", mode="after")
    @classmethod
    def _zero_means_unset(cls, value):
        return value or None


class ErrorResponse(BaseModel):
    """Body of every error response."""
    code: int
    message: str
    description: str
