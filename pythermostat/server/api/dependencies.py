"""Request-scoped dependencies shared by the thermostat routes.

get_store and get_settings hand each handler the objects create_app() put
on app.state. resolve_thermostat is the resolve step for every route with an
{id} segment: it turns the raw path value into a stored Thermostat before
the handler runs, or ends the request with 400/404.
"""
import logging
import re

from fastapi import Depends, Request

from pythermostat.exceptions import BadRequest
from pythermostat.server.config import Settings
from pythermostat.server.core.store import ThermostatStore
from pythermostat.server.models.thermostat import Thermostat

logger = logging.getLogger(__name__)

THERMOSTAT_ID = re.compile(r"[+-]?[0-9]+")


def get_store(request: Request) -> ThermostatStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_thermostat_id(raw: str) -> int:
    """Parse the {id} path segment. Only an optional sign and ASCII digits are accepted."""
    if not THERMOSTAT_ID.fullmatch(raw):
        raise BadRequest(f"invalid syntax: {raw!r}", message="Invalid identifier provided")
    try:
        return int(raw)
    except ValueError as e:
        raise BadRequest(str(e), message="Invalid identifier provided") from e


def resolve_thermostat(
    thermostat_id: str,
    request: Request,
    store: ThermostatStore = Depends(get_store),
) -> Thermostat:
    """Look up the thermostat named in the path and attach it to the request.

    Raises:
        BadRequest: The id is not an integer
        ThermostatNotFound: No thermostat has that id
    """
    thermostat = store.get(parse_thermostat_id(thermostat_id))
    request.state.thermostat = thermostat
    return thermostat
