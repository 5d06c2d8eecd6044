"""
Thermostat Store - In-memory home of thermostats.

Holds every thermostat record in a dict keyed by id and serializes all
access to it with one threading.Lock.

Architecture:
    - One store per application, built in create_app() and kept on app.state
    - Coarse locking: a single lock for the whole map, held only while the
      map is read or written (never while parsing, validating or serializing)
    - Records are frozen pydantic models; updates build a new record and
      replace the map entry

Operations:
    get(id)                 -> Thermostat, raises ThermostatNotFound
    list()                  -> list of Thermostat (order not guaranteed)
    update(target, desired) -> merge provided fields into the stored record
    create(desired)         -> allocate the next id, fill defaults, insert

Update Semantics:
    Only fields present in the request change. The merge starts from the
    record currently stored under target.id, re-read under the lock, so a
    stale target fetched earlier in the request never rolls back a change
    made by another request in between. Concurrent updates to the same
    field are last-writer-wins.

    An update carrying a set point recomputes current_temp as the midpoint
    of the two set points; updates without one leave it alone. When an
    update moves current_temp, previous_temp takes the old value;
    otherwise previous_temp is left alone.

Id Allocation:
    New ids are max(existing ids) + 1. An empty store hands out 1.
"""
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from pythermostat.exceptions import ThermostatNotFound
from pythermostat.server.models.thermostat import Thermostat, UpdateRequest

logger = logging.getLogger(__name__)

# Defaults for thermostats created without a full description
DEFAULT_OP_MODE = "off"
DEFAULT_SET_POINT = 71
DEFAULT_FAN_MODE = "auto"
DEFAULT_CURRENT_TEMP = 71

# Thermostats present when the application starts
SEED_THERMOSTATS = (
    {
        "id": 1,
        "name": "Downstairs Thermostat",
        "current_temp": 71,
        "mode": "heat",
        "cool_set_point": 68,
        "heat_set_point": 72,
        "fan": "auto",
    },
    {
        "id": 2,
        "name": "Upstairs Thermostat",
        "current_temp": 72,
        "mode": "cool",
        "cool_set_point": 69,
        "heat_set_point": 73,
        "fan": "on",
    },
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def midpoint(cool_set_point: Optional[int], heat_set_point: Optional[int]) -> int:
    """Current temperature implied by a pair of set points."""
    if not cool_set_point or not heat_set_point:
        return DEFAULT_CURRENT_TEMP
    return (cool_set_point + heat_set_point) // 2


def _pick(desired, current):
    return current if desired is None else desired


class ThermostatStore:
    """Lock-guarded map of thermostat id -> Thermostat."""

    def __init__(self, seed: bool = True, clock: Callable[[], datetime] = utcnow):
        self._lock = threading.Lock()
        self._thermostats: Dict[int, Thermostat] = {}
        self._clock = clock
        if seed:
            self.seed()

    def __len__(self) -> int:
        with self._lock:
            return len(self._thermostats)

    def __contains__(self, thermostat_id) -> bool:
        with self._lock:
            return thermostat_id in self._thermostats

    def seed(self) -> None:
        """Insert the default thermostats of a new home."""
        with self._lock:
            now = self._clock()
            for values in SEED_THERMOSTATS:
                self._thermostats[values["id"]] = Thermostat(last_changed=now, **values)
        logger.info(f"Seeded store with {len(SEED_THERMOSTATS)} thermostat(s)")

    def _stamp(self, previous: Optional[datetime] = None) -> datetime:
        # lastChanged must move forward on every change, even on a coarse clock
        now = self._clock()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def get(self, thermostat_id: int) -> Thermostat:
        """Get a thermostat by id.

        Raises:
            ThermostatNotFound: No thermostat is stored under thermostat_id
        """
        with self._lock:
            thermostat = self._thermostats.get(thermostat_id)
        if thermostat is None:
            logger.debug(f"Thermostat {thermostat_id} not found")
            raise ThermostatNotFound(thermostat_id)
        return thermostat

    def list(self) -> List[Thermostat]:
        """Snapshot of all thermostats. Callers must not depend on the order."""
        with self._lock:
            return list(self._thermostats.values())

    def update(self, target: Thermostat, desired: UpdateRequest) -> Thermostat:
        """Apply the provided fields of desired to the thermostat target.id.

        Args:
            target: Thermostat to change, as resolved for the request
            desired: Fields to change; None fields keep their stored value

        Returns:
            The new record

        Raises:
            ThermostatNotFound: target.id is no longer in the store
        """
        with self._lock:
            current = self._thermostats.get(target.id)
            if current is None:
                raise ThermostatNotFound(target.id)

            cool_set_point = _pick(desired.cool_set_point, current.cool_set_point)
            heat_set_point = _pick(desired.heat_set_point, current.heat_set_point)

            # Seed records carry temperatures that are not midpoints, so only a set point change recomputes
            temp = current.current_temp
            if desired.cool_set_point is not None or desired.heat_set_point is not None:
                temp = midpoint(cool_set_point, heat_set_point)

            previous_temp = current.previous_temp
            if temp != current.current_temp:
                previous_temp = current.current_temp

            updated = Thermostat(
                id=current.id,
                name=_pick(desired.name, current.name),
                current_temp=temp,
                previous_temp=previous_temp,
                mode=_pick(desired.mode, current.mode),
                cool_set_point=cool_set_point,
                heat_set_point=heat_set_point,
                fan=_pick(desired.fan, current.fan),
                last_changed=self._stamp(current.last_changed),
            )
            self._thermostats[current.id] = updated

        logger.info(f"Updated thermostat {updated.id} ({updated.name})")
        return updated

    def create(self, desired: UpdateRequest) -> int:
        """Add a thermostat built from desired, filling defaults for missing fields.

        Returns:
            Id of the new thermostat
        """
        with self._lock:
            new_id = max(self._thermostats, default=0) + 1

            cool_set_point = _pick(desired.cool_set_point, DEFAULT_SET_POINT)
            heat_set_point = _pick(desired.heat_set_point, DEFAULT_SET_POINT)

            thermostat = Thermostat(
                id=new_id,
                name=_pick(desired.name, f"Thermostat #{new_id}"),
                current_temp=midpoint(cool_set_point, heat_set_point),
                mode=_pick(desired.mode, DEFAULT_OP_MODE),
                cool_set_point=cool_set_point,
                heat_set_point=heat_set_point,
                fan=_pick(desired.fan, DEFAULT_FAN_MODE),
                last_changed=self._stamp(),
            )
            self._thermostats[new_id] = thermostat

        logger.info(f"Created thermostat {new_id} ({thermostat.name})")
        return new_id
