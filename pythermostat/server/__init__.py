"""pyThermostat server: FastAPI application, store and configuration.

Modules:
    main: create_app() application factory
    config: Settings loaded from the environment
    api: HTTP routers
    core: Thermostat store and validation
    models: Pydantic request/response models
"""
