"""
API Routers Module

FastAPI routers defining the server's HTTP endpoints. Routers are
registered in pythermostat.server.main.create_app().

Module Organization:

    thermostats.py - Thermostat REST API
        • Prefix: settings.api_prefix (default /v1)
        • Routes: /thermostats (list, create), /thermostats/{id} (get, put),
          /thermostats/{id}/{field} (single property)
        • Design: Thin handlers - parse, validate, call the store, serialize

    dependencies.py - Shared request dependencies
        • get_store / get_settings: objects held on app.state
        • resolve_thermostat: {id} path segment -> stored Thermostat

Error Responses:

    Handlers raise pythermostat.exceptions.ThermostatAPIError subclasses.
    create_app() renders them as {code, message, description} with the
    matching HTTP status; nothing else needs to build error bodies.
"""
from . import dependencies, thermostats

__all__ = ["dependencies", "thermostats"]
