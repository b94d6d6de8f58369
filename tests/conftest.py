import pytest

from building import Building, ShelterClass, SimpleModel, Space
from simulation_state import SimulationStateElement, SimulationStateHeader


@pytest.fixture
def header():
    return SimulationStateHeader()


@pytest.fixture
def house():
    """A one storey building with no obstructions and no explicit coefficients."""
    return Building("House", shelter_class=ShelterClass.NO_OBSTRUCTIONS, n_storeys=1)


def register_indoor_temperatures(model, header, temperature):
    """Registers a dry bulb temperature slot for every space, as a thermal model would."""
    for i, space in enumerate(model.spaces):
        space.dry_bulb_temperature_index = header.push(
            SimulationStateElement.space_dry_bulb_temperature(i), temperature
        )


@pytest.fixture
def single_space_state(header):
    """
    Returns a function building a one-space model with the given
    infiltration, its indoor temperature registered in the state.
    """
    def _make(infiltration=None, building=None, indoor_temperature=22.0):
        space = Space("Space 0", infiltration=infiltration, building=building)
        model = SimpleModel([space], [building] if building else [])
        register_indoor_temperatures(model, header, indoor_temperature)
        return model, space
    return _make
