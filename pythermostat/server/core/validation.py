"""Validation of desired thermostat state.

validate() checks an UpdateRequest field by field and returns the first
problem found as a BadRequest, or None when the request is acceptable.
Fields that are not provided are never checked.
"""
from typing import Optional

from pythermostat.exceptions import BadRequest
from pythermostat.server.models.thermostat import FAN_MODES, OPERATING_MODES, UpdateRequest

MIN_SET_POINT = 30
MAX_SET_POINT = 100


def validate_op_mode(value: Optional[str]) -> Optional[BadRequest]:
    """Make sure the operating mode is a valid option"""
    if value is not None and value not in OPERATING_MODES:
        return BadRequest(
            "The operating mode provided is not valid. Valid choices are: 'cool', 'heat', or 'off'.",
            message="Invalid Operating Mode",
        )
    return None


def validate_fan_mode(value: Optional[str]) -> Optional[BadRequest]:
    """Make sure the fan mode is a valid option"""
    if value is not None and value not in FAN_MODES:
        return BadRequest(
            "The fan mode provided is not valid. Valid choices are: 'auto' or 'on'.",
            message="Invalid Fan Mode",
        )
    return None


def _validate_set_point(value, kind, minimum, maximum):
    if value is not None and not minimum <= value <= maximum:
        return BadRequest(
            f"The {kind.lower()} set point provided is not within the allowed range. "
            f"It must be between {minimum} and {maximum} degrees Fahrenheit.",
            message=f"Invalid {kind} Set Point",
        )
    return None


def validate_cool_set_point(value: Optional[int], minimum: int = MIN_SET_POINT,
                            maximum: int = MAX_SET_POINT) -> Optional[BadRequest]:
    return _validate_set_point(value, "Cool", minimum, maximum)


def validate_heat_set_point(value: Optional[int], minimum: int = MIN_SET_POINT,
                            maximum: int = MAX_SET_POINT) -> Optional[BadRequest]:
    return _validate_set_point(value, "Heat", minimum, maximum)


def validate(desired: UpdateRequest, min_set_point: int = MIN_SET_POINT,
             max_set_point: int = MAX_SET_POINT) -> Optional[BadRequest]:
    """Check the desired state of a thermostat.

    Checks run in a fixed order and stop at the first failure:
    currentTemp (not writable), mode, fan, coolSetPoint, heatSetPoint.

    Args:
        desired: Parsed update request
        min_set_point: Lowest accepted set point (inclusive)
        max_set_point: Highest accepted set point (inclusive)

    Returns:
        The BadRequest describing the first failure, or None
    """
    if desired.current_temp is not None:
        return BadRequest(
            "The field 'currentTemp' is not a writable field. You must set the cool or heat "
            "set point (coolSetPoint/heatSetPoint) instead.",
            message="Non-Writable Field",
        )

    checks = (
        lambda: validate_op_mode(desired.mode),
        lambda: validate_fan_mode(desired.fan),
        lambda: validate_cool_set_point(desired.cool_set_point, min_set_point, max_set_point),
        lambda: validate_heat_set_point(desired.heat_set_point, min_set_point, max_set_point),
    )
    for check in checks:
        error = check()
        if error is not None:
            return error
    return None
