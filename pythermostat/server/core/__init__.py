"""
Core Business Logic Module

This package holds the parts of the server that own state and rules. The
API layer in pythermostat.server.api only translates HTTP to calls into
these modules.

Module Organization:

    store.py - In-memory home of thermostats
        • Purpose: Owns every thermostat record
        • Responsibilities:
          - Look up thermostats by id
          - Merge partial updates into a fresh copy of a record
          - Allocate ids and fill defaults for new thermostats
          - Seed the two default thermostats at startup
        • Thread Safety: One threading.Lock around the map, held only for
          the map operation itself
        • Lifecycle: Built once per application by create_app() and
          injected into handlers; there is no module-level instance

    validation.py - Rules for desired thermostat state
        • Purpose: Reject bad updates before they reach the store
        • Pure functions, no state, first failure wins

Data Flow:

    HTTP request → resolve dependency → store.get(id)
                                           ↓
                   handler parses body → validate(desired)
                                           ↓
                   store.update(...) / store.create(...)
                                           ↓
                   JSON response

Thread Safety:

    FastAPI runs the synchronous endpoints in a worker thread pool, so
    requests reach the store from several threads at once. Every store
    operation takes the lock, does its map work and releases it.
    Validation runs outside the lock on request-local data.
"""
from .store import ThermostatStore
from .validation import validate

__all__ = ["ThermostatStore", "validate"]
