"""
 Client for the pyThermostat REST API

 Classes
    ThermostatClient(base_url, timeout, session, prefix)

 Functions
    list()                              # All thermostats (list of Thermostat)
    get(id)                             # One thermostat
    get_field(id, field)                # One property as a bare value
    update(id, **fields)                # Change the given fields
    create(**fields)                    # Add a thermostat, returns it with its id

 Fields are given by their Python names (name, mode, cool_set_point,
 heat_set_point, fan) and sent under their JSON names. Fields set to None are
 left out of the request.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from pythermostat.exceptions import ClientError
from pythermostat.server.models.thermostat import Thermostat, UpdateRequest

log = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:8080"


class ThermostatClient(object):
    def __init__(self, base_url: str = DEFAULT_URL, timeout: float = 5,
                 session: Optional[requests.Session] = None, prefix: str = "/v1"):
        self.base_url = base_url.rstrip("/")
        self.prefix = prefix
        self.timeout = timeout
        # Create session object for http connection re-use
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{self.prefix}{path}"

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = self._url(path)
        log.debug(f' -- client: {method} {url} {payload or ""}')
        try:
            r = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            log.debug('ERROR Timeout waiting for thermostat API %s' % url)
            raise ConnectionError(f"Timeout waiting for {url}") from exc
        except requests.exceptions.ConnectionError as exc:
            log.debug('ERROR Unable to connect to thermostat API at %s' % url)
            raise ConnectionError(f"Unable to connect to {url}") from exc
        if r.status_code >= 400:
            try:
                error = r.json()
            except ValueError:
                error = None
            if not isinstance(error, dict):
                error = None
            log.debug(f'ERROR {r.status_code} from {url}: {r.text}')
            raise ClientError(r.status_code, error, r.text)
        return r

    @staticmethod
    def _payload(fields: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(fields) - set(UpdateRequest.model_fields)
        if unknown:
            raise TypeError(f"Unknown thermostat field(s): {', '.join(sorted(unknown))}")
        desired = UpdateRequest(**{k: v for k, v in fields.items() if v is not None})
        return desired.model_dump(by_alias=True, exclude_none=True)

    def list(self) -> List[Thermostat]:
        r = self._request("GET", "/thermostats")
        return [Thermostat.model_validate(item) for item in r.json()]

    def get(self, thermostat_id: int) -> Thermostat:
        r = self._request("GET", f"/thermostats/{thermostat_id}")
        return Thermostat.model_validate(r.json())

    def get_field(self, thermostat_id: int, field: str) -> Any:
        r = self._request("GET", f"/thermostats/{thermostat_id}/{field}")
        return r.json()

    def update(self, thermostat_id: int, **fields) -> None:
        self._request("PUT", f"/thermostats/{thermostat_id}", self._payload(fields))

    def create(self, **fields) -> Thermostat:
        r = self._request("POST", "/thermostats", self._payload(fields))
        return Thermostat.model_validate(r.json())
