# pyThermostat Module
# -*- coding: utf-8 -*-
"""
 Python module serving and consuming a small REST API for home thermostats

 For more information see README.md

 Features
    * In-memory home of thermostats guarded by a single lock
    * Partial updates: only the fields sent in a request are changed
    * Input validation for operating modes, fan modes and set points
    * FastAPI server with generated OpenAPI docs (/docs, /redoc)
    * Requests based client for the /v1 API

 Classes
    ThermostatStore(seed, clock)           # pythermostat.server.core.store
    ThermostatClient(base_url, timeout)    # pythermostat.client

 Functions
    create_app(store, settings)            # pythermostat.server.main - build the FastAPI app
    set_debug(toggle, color)               # Enable verbose logging

 Command line
    python -m pythermostat server          # Run the API server
    python -m pythermostat list            # List thermostats on a running server
"""
import logging
import sys

version_tuple = (0, 1, 0)
version = __version__ = '%d.%d.%d' % version_tuple
__author__ = 'pythermostat contributors'

log = logging.getLogger(__name__)
log.debug('%s version %s', __name__, __version__)
log.debug('Python %s on %s', sys.version, sys.platform)


def set_debug(toggle=True, color=True):
    """Enable verbose logging"""
    if toggle:
        if color:
            logging.basicConfig(format='\x1b[31;1m%(levelname)s:%(message)s\x1b[0m', level=logging.DEBUG)
        else:
            logging.basicConfig(format='%(levelname)s:%(message)s', level=logging.DEBUG)
        log.setLevel(logging.DEBUG)
        log.debug("%s [%s]\n" % (__name__, __version__))
    else:
        log.setLevel(logging.NOTSET)
