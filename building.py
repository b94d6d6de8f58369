"""
Defines the building model consumed by the air-flow model: buildings,
spaces and the infiltration specification attached to each space.

This module provides:
- The five Infiltration variants and infiltration_from_config().
- Building and Space.
- SimpleModel and create_simple_model(), which builds a model from the
  'buildings' and 'spaces' sections of a JSON configuration.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from exceptions import AirFlowConfigurationError, MissingStateError


class ShelterClass(Enum):
    """Exposure of a building to wind, used by the leakage area model."""
    NO_OBSTRUCTIONS = "no_obstructions"
    ISOLATED_RURAL = "isolated_rural"
    URBAN = "urban"
    LARGE_LOT_URBAN = "large_lot_urban"
    SMALL_LOT_URBAN = "small_lot_urban"

    @classmethod
    def from_config(cls, value):
        try:
            return cls(value)
        except ValueError:
            raise AirFlowConfigurationError(
                f"Unknown shelter class '{value}'. "
                f"Available classes are: {[c.value for c in cls]}"
            ) from None


# --- Infiltration specifications ---

@dataclass(frozen=True)
class Constant:
    """A fixed infiltration flow (m3/s), independent of the weather."""
    flow: float


@dataclass(frozen=True)
class Blast:
    """Design flow rate (m3/s) scaled with the BLAST default coefficients."""
    design_flow: float


@dataclass(frozen=True)
class Doe2:
    """Design flow rate (m3/s) scaled with the DOE-2 default coefficients."""
    design_flow: float


@dataclass(frozen=True)
class DesignFlowRate:
    """
    EnergyPlus' ZoneInfiltration:DesignFlowRate with user coefficients.
    """
    a: float
    b: float
    c: float
    d: float
    design_flow: float


@dataclass(frozen=True)
class EffectiveAirLeakageArea:
    """
    EnergyPlus' ZoneInfiltration:EffectiveLeakageArea. The area is in cm2;
    stack and wind coefficients come from the space's building.
    """
    area: float


INFILTRATION_TYPES = {
    "constant": (Constant, ("flow",)),
    "blast": (Blast, ("design_flow",)),
    "doe2": (Doe2, ("design_flow",)),
    "design_flow_rate": (DesignFlowRate, ("a", "b", "c", "d", "design_flow")),
    "effective_air_leakage_area": (EffectiveAirLeakageArea, ("area",)),
}


def infiltration_from_config(infiltration_props: dict):
    """
    Factory function to create an Infiltration variant from config properties.

    Args:
        infiltration_props: e.g. {"type": "doe2", "design_flow": 0.1}

    Returns:
        One of Constant, Blast, Doe2, DesignFlowRate or EffectiveAirLeakageArea.
    """
    infiltration_type = infiltration_props.get('type')
    if infiltration_type not in INFILTRATION_TYPES:
        raise AirFlowConfigurationError(
            f"Unknown infiltration type: '{infiltration_type}'. "
            f"Available types are: {list(INFILTRATION_TYPES.keys())}"
        )

    InfiltrationClass, parameter_names = INFILTRATION_TYPES[infiltration_type]
    try:
        parameters = {name: float(infiltration_props[name]) for name in parameter_names}
    except KeyError as e:
        raise AirFlowConfigurationError(
            f"Missing required parameter {e} for infiltration type '{infiltration_type}'"
        ) from None
    return InfiltrationClass(**parameters)


class Building:
    """
    A building owning one or more spaces. Only the effective leakage area
    infiltration model reads its attributes.
    """
    def __init__(self, name, stack_coefficient=None, wind_coefficient=None,
                 shelter_class=None, n_storeys=None):
        self.name = name
        self.stack_coefficient = stack_coefficient
        self.wind_coefficient = wind_coefficient
        self.shelter_class = shelter_class
        self.n_storeys = n_storeys

    def __repr__(self):
        return f"Building({self.name!r})"


class Space:
    """
    A zone of the building. Temperatures and infiltration results live in
    the shared SimulationState; the space only keeps the indices of its
    slots.
    """
    def __init__(self, name, infiltration=None, building: Optional[Building] = None):
        self.name = name
        self.infiltration = infiltration
        self.building = building

        self.dry_bulb_temperature_index = None
        self.infiltration_volume_index = None
        self.infiltration_temperature_index = None

    def __repr__(self):
        return f"Space({self.name!r})"

    def _require(self, index, what):
        if index is None:
            raise MissingStateError(f"Space '{self.name}' does not have a {what} registered in the simulation state")
        return index

    def dry_bulb_temperature(self, state):
        """Returns the indoor dry bulb temperature, or None if it is not tracked."""
        if self.dry_bulb_temperature_index is None:
            return None
        return state[self.dry_bulb_temperature_index]

    def infiltration_volume(self, state):
        return state[self._require(self.infiltration_volume_index, "infiltration volume")]

    def set_infiltration_volume(self, state, value):
        state[self._require(self.infiltration_volume_index, "infiltration volume")] = value

    def infiltration_temperature(self, state):
        return state[self._require(self.infiltration_temperature_index, "infiltration temperature")]

    def set_infiltration_temperature(self, state, value):
        state[self._require(self.infiltration_temperature_index, "infiltration temperature")] = value


class SimpleModel:
    """
    Ordered collection of the spaces and buildings of a simulation.
    """
    def __init__(self, spaces: Optional[List[Space]] = None, buildings: Optional[List[Building]] = None):
        self.spaces = list(spaces) if spaces else []
        self.buildings = list(buildings) if buildings else []

    def add_building(self, building):
        self.buildings.append(building)
        return building

    def add_space(self, space):
        self.spaces.append(space)
        return space


def _storeys_from_config(building_props):
    """Reads 'n_storeys' as an int; JSON may give it as 2.0."""
    value = building_props.get('n_storeys')
    if value is None:
        return None
    try:
        n_storeys = float(value)
    except (TypeError, ValueError):
        n_storeys = None
    if n_storeys is None or isinstance(value, bool) or not n_storeys.is_integer() or n_storeys < 1:
        raise AirFlowConfigurationError(
            f"Building '{building_props['name']}' has an invalid n_storeys: {value!r}. "
            f"It must be a whole number of at least 1"
        )
    return int(n_storeys)


def create_simple_model(config):
    """
    Builds a SimpleModel from a configuration dictionary.

    Args:
        config (dict): Must contain a 'spaces' list; may contain a
                       'buildings' list. Spaces refer to buildings by name.

    Returns:
        SimpleModel
    """
    model = SimpleModel()
    buildings_by_name = {}

    for building_props in config.get('buildings', []):
        shelter = building_props.get('shelter_class')
        building = Building(
            name=building_props['name'],
            stack_coefficient=building_props.get('stack_coefficient'),
            wind_coefficient=building_props.get('wind_coefficient'),
            shelter_class=ShelterClass.from_config(shelter) if shelter is not None else None,
            n_storeys=_storeys_from_config(building_props),
        )
        buildings_by_name[building.name] = model.add_building(building)

    for space_props in config['spaces']:
        name = space_props['name']

        building = None
        building_name = space_props.get('building')
        if building_name is not None:
            building = buildings_by_name.get(building_name)
            if building is None:
                raise AirFlowConfigurationError(
                    f"Space '{name}' refers to Building '{building_name}', which does not exist"
                )

        infiltration = None
        if space_props.get('infiltration'):
            infiltration = infiltration_from_config(space_props['infiltration'])

        model.add_space(Space(name, infiltration=infiltration, building=building))

    return model
