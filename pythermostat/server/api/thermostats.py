"""
Thermostat API

REST API over the thermostats of the home. All routes are prefixed with the
configured API prefix (default /v1, see create_app()).

Routes:
    - GET  /v1/thermostats               -> List all thermostats
    - POST /v1/thermostats               -> Create a thermostat
    - GET  /v1/thermostats/{id}          -> Get one thermostat
    - PUT  /v1/thermostats/{id}          -> Bulk update a thermostat
    - GET  /v1/thermostats/{id}/{field}  -> Get one field of a thermostat

Design Notes:
    - Routes with an {id} segment depend on resolve_thermostat, which runs
      before the handler and ends the request with 400/404 on a bad id
    - Endpoints are plain functions, so FastAPI runs each request in its
      worker thread pool; the store does its own locking
    - Request bodies are read raw and parsed here so malformed JSON is a 400
      with the usual error body, not FastAPI's 422
    - Errors are raised as ThermostatAPIError and rendered by the handler
      registered in create_app()
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from pythermostat.exceptions import BadRequest, NotFound
from pythermostat.server.api.dependencies import get_settings, get_store, resolve_thermostat
from pythermostat.server.config import Settings
from pythermostat.server.core.store import ThermostatStore
from pythermostat.server.core.validation import validate
from pythermostat.server.models.thermostat import FIELD_NAMES, ErrorResponse, Thermostat, UpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter()

BAD_REQUEST = {400: {"model": ErrorResponse}}
NOT_FOUND = {404: {"model": ErrorResponse}}


async def read_body(request: Request) -> bytes:
    return await request.body()


def parse_update(body: bytes) -> UpdateRequest:
    """Parse a request body into an UpdateRequest.

    Raises:
        BadRequest: The body is not JSON or does not match the update shape
    """
    try:
        return UpdateRequest.model_validate_json(body)
    except ValidationError as e:
        problems = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            problems.append(f"{location}: {error['msg']}" if location else error["msg"])
        raise BadRequest("; ".join(problems), message="Invalid JSON body provided") from e


def check_update(desired: UpdateRequest, settings: Settings) -> None:
    error = validate(desired, settings.min_set_point, settings.max_set_point)
    if error is not None:
        logger.info(f"Rejected thermostat change: {error.message}")
        raise error


@router.get("/thermostats", response_model=List[Thermostat], responses=NOT_FOUND)
def list_thermostats(store: ThermostatStore = Depends(get_store)):
    """List every thermostat in the home.

    An empty home is answered with 404, not an empty list.
    """
    thermostats = store.list()
    if not thermostats:
        raise NotFound("No thermostats were found.")
    return thermostats


@router.post("/thermostats", response_model=Thermostat, responses=BAD_REQUEST)
def create_thermostat(
    body: bytes = Depends(read_body),
    store: ThermostatStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Add a thermostat to the home.

    Fields left out of the body get defaults: name "Thermostat #<id>",
    mode "off", set points 71, fan "auto". The response is the new
    thermostat, including its id.
    """
    desired = parse_update(body)
    check_update(desired, settings)
    new_id = store.create(desired)
    return store.get(new_id)


@router.get("/thermostats/{thermostat_id}", response_model=Thermostat, responses={**BAD_REQUEST, **NOT_FOUND})
def get_thermostat(thermostat: Thermostat = Depends(resolve_thermostat)):
    """Get everything about one thermostat."""
    return thermostat


@router.put("/thermostats/{thermostat_id}", responses={**BAD_REQUEST, **NOT_FOUND})
def put_thermostat(
    thermostat: Thermostat = Depends(resolve_thermostat),
    body: bytes = Depends(read_body),
    store: ThermostatStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Bulk update one thermostat.

    Only the fields present in the body change. currentTemp can not be
    written; send coolSetPoint/heatSetPoint instead. Answers 200 with an
    empty body.
    """
    desired = parse_update(body)
    check_update(desired, settings)
    store.update(thermostat, desired)
    return Response(status_code=200, media_type="application/json")


@router.get("/thermostats/{thermostat_id}/{field}", responses={**BAD_REQUEST, **NOT_FOUND})
def get_field(field: str, thermostat: Thermostat = Depends(resolve_thermostat)):
    """Get a single property of a thermostat as a bare JSON value.

    Valid properties: name, currentTemp, mode, coolSetPoint, heatSetPoint, fan.
    A property holding 0 or "" is reported as missing (404).
    """
    attribute = FIELD_NAMES.get(field)
    if attribute is None:
        raise BadRequest(
            "The property provided is not a valid property of a thermostat. Valid choices are: "
            "'name', 'currentTemp', 'mode', 'coolSetPoint', 'heatSetPoint', or 'fan'.",
            message="Invalid Property",
        )

    value = getattr(thermostat, attribute)
    if not value:
        raise NotFound(f"No field '{field}' exists for requested thermostat.")
    return JSONResponse(content=value)
