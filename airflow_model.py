"""
Defines the air-flow model: the simulation model that calculates, on each
timestep, the infiltration volume and temperature of every space.

This class provides:
- __init__(): To register the state slots and build a resolver per space.
- march(): To advance one timestep.
"""
import logging

from exceptions import AirFlowConfigurationError
from resolvers import build_resolver
from simulation_state import SimulationStateElement

logger = logging.getLogger(__name__)


class AirFlowModel:
    """
    Calculates space infiltration. The resolvers are stored in the same
    order as the model's spaces.
    """

    def __init__(self, model, state_header, n=1):
        """
        Builds a resolver for each space, then registers the infiltration
        volume and temperature of each space in the state header.

        Args:
            model (SimpleModel): The building model.
            state_header (SimulationStateHeader): Registry of state slots.
            n (int): Number of subdivisions of the main timestep. Infiltration
                     is quasi-static, so it is not used.

        Raises:
            AirFlowConfigurationError: If any space cannot be resolved.
        """
        # Resolve every space first so a failure leaves the state header untouched
        resolvers = []
        for space in model.spaces:
            try:
                resolvers.append(build_resolver(space))
            except AirFlowConfigurationError as e:
                raise AirFlowConfigurationError(
                    f"{self.module_name()}: could not resolve infiltration of Space '{space.name}': {e}"
                ) from e

        for i, space in enumerate(model.spaces):
            initial_vol = 0.0
            initial_temp = 0.0
            space.infiltration_volume_index = state_header.push(
                SimulationStateElement.space_infiltration_volume(i), initial_vol
            )
            space.infiltration_temperature_index = state_header.push(
                SimulationStateElement.space_infiltration_temperature(i), initial_temp
            )

        self.resolvers = resolvers

        logger.info(f"{self.module_name()} created for {len(self.resolvers)} spaces")

    @staticmethod
    def module_name():
        return "Air-flow model"

    def march(self, date, weather, model, state):
        """
        Advances one main timestep: samples the weather once and runs
        every resolver with it.

        Raises:
            MissingWeatherDataError, MissingStateError: If a model lacks the
                data it needs. The whole step fails.
        """
        current_weather = weather.get_weather_data(date)
        for resolver in self.resolvers:
            resolver(current_weather, state)
