"""
Unit tests of the infiltration formulas.

The reference factors come from EnergyPlus' Input/Output Reference:
BLAST coefficients give 1.0 at 0 C deltaT and 3.35 m/s (summer) and 2.75
at 40 C deltaT and 6 m/s (winter). DOE-2 coefficients give 0.75 and 1.34
for the same conditions, and 1.0 at 4.47 m/s.
"""
import math

import pytest

from exceptions import MissingStateError, MissingWeatherDataError
from infiltration import (
    blast_design_flow_rate,
    design_flow_rate,
    doe2_design_flow_rate,
    effective_leakage_area,
)

# ============================================================================
# DESIGN FLOW RATE
# ============================================================================


@pytest.mark.parametrize("outdoor, indoor, wind, expected", [
    (2.0, 2.0, 3.35, 1.0),     # summer
    (-38.0, 2.0, 6.0, 2.75),   # winter
])
def test_blast_design_flow_rate(outdoor, indoor, wind, expected):
    flow = blast_design_flow_rate(outdoor, indoor, wind, 1.0)
    assert flow == pytest.approx(expected, rel=0.02)


@pytest.mark.parametrize("outdoor, indoor, wind, expected", [
    (2.0, 2.0, 3.35, 0.75),
    (42.0, 2.0, 6.0, 1.34),
    (42.0, 2.0, 4.47, 1.0),
])
def test_doe2_design_flow_rate(outdoor, indoor, wind, expected):
    flow = doe2_design_flow_rate(outdoor, indoor, wind, 1.0)
    assert flow == pytest.approx(expected, rel=0.02)


def test_design_rate_scales_flow():
    assert doe2_design_flow_rate(42.0, 2.0, 4.47, 3.0) == pytest.approx(
        3.0 * doe2_design_flow_rate(42.0, 2.0, 4.47, 1.0)
    )


def test_design_flow_rate_with_free_coefficients():
    # 2 * (0.1 + 0.02*10 + 0.3*2 + 0.05*4)
    flow = design_flow_rate(10.0, 20.0, 2.0, 2.0, 0.1, 0.02, 0.3, 0.05)
    assert flow == pytest.approx(2.2)


def test_design_flow_rate_is_symmetric_in_temperature_difference():
    warmer_outside = design_flow_rate(30.0, 20.0, 1.0, 1.0, 0.0, 0.1, 0.0, 0.0)
    colder_outside = design_flow_rate(10.0, 20.0, 1.0, 1.0, 0.0, 0.1, 0.0, 0.0)
    assert warmer_outside == pytest.approx(colder_outside)


def test_design_flow_rate_requires_wind_speed():
    with pytest.raises(MissingWeatherDataError):
        doe2_design_flow_rate(10.0, 20.0, None, 1.0)


def test_design_flow_rate_requires_outdoor_temperature():
    with pytest.raises(MissingWeatherDataError):
        blast_design_flow_rate(None, 20.0, 3.0, 1.0)


def test_design_flow_rate_requires_indoor_temperature():
    with pytest.raises(MissingStateError):
        design_flow_rate(10.0, None, 3.0, 1.0, 0.0, 0.0, 0.224, 0.0)


# ============================================================================
# EFFECTIVE LEAKAGE AREA
# ============================================================================

def test_effective_leakage_area():
    cs, cw = 0.000145, 0.000319
    flow = effective_leakage_area(0.0, 20.0, 4.0, 100.0, cs, cw)
    expected = 0.1 * math.sqrt(cs * 20.0 + cw * 16.0)
    assert flow == pytest.approx(expected)


def test_effective_leakage_area_missing_wind_is_calm():
    cs, cw = 0.000145, 0.000319
    assert effective_leakage_area(0.0, 20.0, None, 100.0, cs, cw) == pytest.approx(
        effective_leakage_area(0.0, 20.0, 0.0, 100.0, cs, cw)
    )


def test_effective_leakage_area_no_driving_force():
    assert effective_leakage_area(20.0, 20.0, 0.0, 100.0, 0.000145, 0.000319) == 0.0


def test_effective_leakage_area_requires_temperatures():
    with pytest.raises(MissingWeatherDataError):
        effective_leakage_area(None, 20.0, 1.0, 100.0, 0.000145, 0.000319)
    with pytest.raises(MissingStateError):
        effective_leakage_area(0.0, None, 1.0, 100.0, 0.000145, 0.000319)
