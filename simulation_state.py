"""
Defines the shared simulation state: a registry of named slots that is
filled in while the models are constructed, and the fixed-size numeric
buffer that is handed to every model on each timestep.
"""
from dataclasses import dataclass
from enum import Enum

import numpy as np


class StateElementKind(Enum):
    SPACE_DRY_BULB_TEMPERATURE = "space_dry_bulb_temperature"
    SPACE_INFILTRATION_VOLUME = "space_infiltration_volume"
    SPACE_INFILTRATION_TEMPERATURE = "space_infiltration_temperature"


@dataclass(frozen=True)
class SimulationStateElement:
    """
    Names a slot in the simulation state, e.g. the infiltration volume
    of the space at position `space_index` in the model.
    """
    kind: StateElementKind
    space_index: int

    @classmethod
    def space_dry_bulb_temperature(cls, space_index):
        return cls(StateElementKind.SPACE_DRY_BULB_TEMPERATURE, space_index)

    @classmethod
    def space_infiltration_volume(cls, space_index):
        return cls(StateElementKind.SPACE_INFILTRATION_VOLUME, space_index)

    @classmethod
    def space_infiltration_temperature(cls, space_index):
        return cls(StateElementKind.SPACE_INFILTRATION_TEMPERATURE, space_index)

    def __str__(self):
        return f"{self.kind.value}[{self.space_index}]"


@dataclass(frozen=True)
class StateIndex:
    """Position of a registered slot in the state buffer."""
    position: int

    def __index__(self):
        return self.position


class SimulationState:
    """
    Fixed-size buffer of float values addressed by StateIndex.
    """
    def __init__(self, values):
        self._values = np.array(values, dtype=np.float64)

    def __len__(self):
        return len(self._values)

    def __getitem__(self, index: StateIndex) -> float:
        if not isinstance(index, StateIndex):
            raise TypeError(f"State must be indexed with a StateIndex, not {type(index).__name__}")
        return float(self._values[index.position])

    def __setitem__(self, index: StateIndex, value: float):
        if not isinstance(index, StateIndex):
            raise TypeError(f"State must be indexed with a StateIndex, not {type(index).__name__}")
        self._values[index.position] = value

    @property
    def values(self):
        """Read-only view of the whole buffer."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def copy(self):
        return SimulationState(self._values.copy())


class SimulationStateHeader:
    """
    Registry of state slots. Models push the elements they own during
    construction; the host then turns the header into a SimulationState.
    """
    def __init__(self):
        self.elements = []
        self._initial_values = []
        self._positions = {}

    def __len__(self):
        return len(self.elements)

    def push(self, element: SimulationStateElement, initial_value: float) -> StateIndex:
        """
        Registers a new slot and returns its index.

        Raises:
            ValueError: If the element has already been registered.
        """
        if element in self._positions:
            raise ValueError(f"Element '{element}' is already registered in the simulation state")

        index = StateIndex(len(self.elements))
        self.elements.append(element)
        self._initial_values.append(float(initial_value))
        self._positions[element] = index
        return index

    def index_of(self, element: SimulationStateElement):
        """Returns the index of a registered element, or None."""
        return self._positions.get(element)

    def take_values(self) -> SimulationState:
        """Builds the state buffer holding every registered initial value."""
        return SimulationState(self._initial_values)
