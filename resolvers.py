"""
Turns the infiltration specification of each space into a resolver: a
callable bound to that space which, given the current weather and the
simulation state, writes the space's infiltration volume and temperature.

All branching and cross-referencing (e.g. looking up the coefficients of
the effective leakage area model from the building) is done here, once,
when the resolvers are built.
"""
import logging
from typing import Callable

from building import (
    Blast,
    Constant,
    DesignFlowRate,
    Doe2,
    EffectiveAirLeakageArea,
)
from constants import MAX_TABULATED_STOREYS, STACK_COEFFICIENTS, WIND_COEFFICIENTS
from exceptions import AirFlowConfigurationError, MissingWeatherDataError
from infiltration import (
    blast_design_flow_rate,
    design_flow_rate,
    doe2_design_flow_rate,
    effective_leakage_area,
)
from simulation_state import SimulationState
from weather import CurrentWeather

logger = logging.getLogger(__name__)

Resolver = Callable[[CurrentWeather, SimulationState], None]


def _outdoor_temperature(current_weather):
    if current_weather.dry_bulb_temperature is None:
        raise MissingWeatherDataError("Weather does not have dry bulb temperature")
    return current_weather.dry_bulb_temperature


# --- Coefficient resolution for the effective leakage area model ---

def _storey_count(space, building):
    """Validates the building's number of storeys as a positive integer."""
    n_storeys = building.n_storeys
    if isinstance(n_storeys, bool) or not float(n_storeys).is_integer() or n_storeys < 1:
        raise AirFlowConfigurationError(
            f"Building '{building.name}' (used in Space '{space.name}') has {n_storeys} storeys... "
            f"n_storeys must be a whole number of at least 1"
        )
    return int(n_storeys)


def resolve_stack_coefficient(space, building):
    """
    Returns the building's stack coefficient or, if it has none, the
    tabulated value for its number of storeys.
    """
    if building.stack_coefficient is not None:
        return building.stack_coefficient

    n_storeys = building.n_storeys
    if n_storeys is None:
        raise AirFlowConfigurationError(
            f"Space '{space.name}' has been assigned an Infiltration::EffectiveAirLeakageArea "
            f"but its associated building has not enough data... Please assign values to the "
            f"Building's stack_coefficient or n_storeys fields"
        )
    n_storeys = _storey_count(space, building)

    if n_storeys > MAX_TABULATED_STOREYS:
        logger.warning(
            f"The Infiltration::EffectiveAirLeakageArea object (used in Space '{space.name}') "
            f"is appropriate for Buildings up to about {MAX_TABULATED_STOREYS} storeys... "
            f"Building '{building.name}' is {n_storeys} storeys"
        )
        n_storeys = MAX_TABULATED_STOREYS
    return STACK_COEFFICIENTS[n_storeys]


def resolve_wind_coefficient(space, building):
    """
    Returns the building's wind coefficient or, if it has none, the
    tabulated value for its shelter class and number of storeys.
    """
    if building.wind_coefficient is not None:
        return building.wind_coefficient

    n_storeys = building.n_storeys
    if n_storeys is None:
        raise AirFlowConfigurationError(
            f"Building '{building.name}', associated with Space '{space.name}' has not been "
            f"assigned an n_storeys field... Cannot resolve Wind Coefficient for "
            f"EffectiveAirLeakageArea infiltration"
        )
    n_storeys = _storey_count(space, building)

    if building.shelter_class is None:
        raise AirFlowConfigurationError(
            f"Space '{space.name}' has been assigned an Infiltration::EffectiveAirLeakageArea "
            f"but its associated building has not enough data... Please assign values to the "
            f"Building's wind_coefficient or shelter_class and n_storeys fields"
        )

    by_storeys = WIND_COEFFICIENTS[building.shelter_class.value]
    return by_storeys[min(n_storeys, MAX_TABULATED_STOREYS) - 1]


# --- Resolver builders ---

def no_infiltration_resolver(space) -> Resolver:
    def resolver(current_weather, state):
        pass
    return resolver


def constant_resolver(space, flow) -> Resolver:
    def resolver(current_weather, state):
        space.set_infiltration_temperature(state, _outdoor_temperature(current_weather))
        space.set_infiltration_volume(state, flow)
    return resolver


def blast_resolver(space, design_flow) -> Resolver:
    def resolver(current_weather, state):
        outdoor_temperature = _outdoor_temperature(current_weather)
        space.set_infiltration_temperature(state, outdoor_temperature)

        volume = blast_design_flow_rate(
            outdoor_temperature,
            space.dry_bulb_temperature(state),
            current_weather.wind_speed,
            design_flow,
        )
        space.set_infiltration_volume(state, volume)
    return resolver


def doe2_resolver(space, design_flow) -> Resolver:
    def resolver(current_weather, state):
        outdoor_temperature = _outdoor_temperature(current_weather)
        space.set_infiltration_temperature(state, outdoor_temperature)

        volume = doe2_design_flow_rate(
            outdoor_temperature,
            space.dry_bulb_temperature(state),
            current_weather.wind_speed,
            design_flow,
        )
        space.set_infiltration_volume(state, volume)
    return resolver


def design_flow_rate_resolver(space, a, b, c, d, design_flow) -> Resolver:
    def resolver(current_weather, state):
        outdoor_temperature = _outdoor_temperature(current_weather)
        space.set_infiltration_temperature(state, outdoor_temperature)

        volume = design_flow_rate(
            outdoor_temperature,
            space.dry_bulb_temperature(state),
            current_weather.wind_speed,
            design_flow, a, b, c, d,
        )
        space.set_infiltration_volume(state, volume)
    return resolver


def effective_air_leakage_resolver(space, area) -> Resolver:
    building = space.building
    if building is None:
        raise AirFlowConfigurationError(
            f"Space '{space.name}' has been assigned an Infiltration::EffectiveAirLeakageArea "
            f"but no building... Assign a Building to it."
        )

    cs = resolve_stack_coefficient(space, building)
    cw = resolve_wind_coefficient(space, building)
    logger.debug(f"Space '{space.name}': stack coefficient {cs}, wind coefficient {cw}")

    def resolver(current_weather, state):
        outdoor_temperature = _outdoor_temperature(current_weather)
        space.set_infiltration_temperature(state, outdoor_temperature)

        volume = effective_leakage_area(
            outdoor_temperature,
            space.dry_bulb_temperature(state),
            current_weather.wind_speed,
            area, cs, cw,
        )
        space.set_infiltration_volume(state, volume)
    return resolver


RESOLVER_MAP = {
    Constant: lambda space, inf: constant_resolver(space, inf.flow),
    Blast: lambda space, inf: blast_resolver(space, inf.design_flow),
    Doe2: lambda space, inf: doe2_resolver(space, inf.design_flow),
    DesignFlowRate: lambda space, inf: design_flow_rate_resolver(
        space, inf.a, inf.b, inf.c, inf.d, inf.design_flow
    ),
    EffectiveAirLeakageArea: lambda space, inf: effective_air_leakage_resolver(space, inf.area),
}


def build_resolver(space) -> Resolver:
    """
    Builds the resolver matching the space's infiltration specification.

    Raises:
        AirFlowConfigurationError: If the specification is unknown or the
            building lacks the data it needs.
    """
    infiltration = space.infiltration
    if infiltration is None:
        logger.debug(f"Space '{space.name}' has no infiltration")
        return no_infiltration_resolver(space)

    builder = RESOLVER_MAP.get(type(infiltration))
    if builder is None:
        raise AirFlowConfigurationError(
            f"Space '{space.name}' has an unsupported infiltration specification: {infiltration!r}"
        )

    logger.debug(f"Space '{space.name}' uses {type(infiltration).__name__} infiltration")
    return builder(space, infiltration)
