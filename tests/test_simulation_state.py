import pytest

from simulation_state import (
    SimulationState,
    SimulationStateElement,
    StateIndex,
)


def test_push_returns_consecutive_indices(header):
    first = header.push(SimulationStateElement.space_infiltration_volume(0), 1.5)
    second = header.push(SimulationStateElement.space_infiltration_temperature(0), -2.0)

    assert first == StateIndex(0)
    assert second == StateIndex(1)
    assert len(header) == 2


def test_take_values_keeps_initial_values(header):
    volume = header.push(SimulationStateElement.space_infiltration_volume(0), 1.5)
    temperature = header.push(SimulationStateElement.space_infiltration_temperature(0), -2.0)

    state = header.take_values()

    assert len(state) == 2
    assert state[volume] == 1.5
    assert state[temperature] == -2.0


def test_duplicate_element_is_rejected(header):
    header.push(SimulationStateElement.space_infiltration_volume(3), 0.0)
    with pytest.raises(ValueError, match="already registered"):
        header.push(SimulationStateElement.space_infiltration_volume(3), 0.0)


def test_index_of_unknown_element(header):
    assert header.index_of(SimulationStateElement.space_dry_bulb_temperature(0)) is None


def test_state_requires_state_index():
    state = SimulationState([1.0, 2.0])
    with pytest.raises(TypeError):
        state[0]
    with pytest.raises(TypeError):
        state[1] = 3.0


def test_values_view_is_read_only():
    state = SimulationState([1.0, 2.0])
    state[StateIndex(1)] = 5.0
    view = state.values
    assert list(view) == [1.0, 5.0]
    with pytest.raises(ValueError):
        view[0] = 10.0


def test_copy_is_independent():
    state = SimulationState([1.0])
    clone = state.copy()
    clone[StateIndex(0)] = 2.0
    assert state[StateIndex(0)] == 1.0
