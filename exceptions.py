"""
Errors raised by the air-flow model.
"""


class AirFlowConfigurationError(ValueError):
    """The building model lacks data required to set up infiltration."""


class MissingWeatherDataError(RuntimeError):
    """The weather sample does not contain a field a model needs."""


class MissingStateError(RuntimeError):
    """A space has no value registered in the simulation state."""
