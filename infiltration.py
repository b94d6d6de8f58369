"""
Infiltration flow rate formulas, as reported in EnergyPlus' Input/Output
Reference. All functions are pure: they take the current outdoor
conditions, the indoor temperature and the model coefficients, and return
a volumetric flow rate (m3/s).
"""
import math

from constants import BLAST_COEFFICIENTS, DOE2_COEFFICIENTS
from exceptions import MissingStateError, MissingWeatherDataError


def _require_outdoor_temperature(outdoor_temp):
    if outdoor_temp is None:
        raise MissingWeatherDataError("Weather given did not have Dry Bulb temperature")
    return outdoor_temp


def _require_indoor_temperature(indoor_temp):
    if indoor_temp is None:
        raise MissingStateError("Space does not have Dry Bulb temperature")
    return indoor_temp


def design_flow_rate(outdoor_temp, indoor_temp, wind_speed, design_rate, a, b, c, d):
    """
    Calculates an infiltration rate equal to that estimated by EnergyPlus'
    ZoneInfiltration:DesignFlowRate:

        phi = phi_design * (A + B|T_space - T_out| + C*W + D*W^2)

    Raises:
        MissingWeatherDataError: If the outdoor temperature or the wind speed is None.
        MissingStateError: If the indoor temperature is None.
    """
    t_space = _require_indoor_temperature(indoor_temp)
    t_out = _require_outdoor_temperature(outdoor_temp)
    if wind_speed is None:
        raise MissingWeatherDataError("Weather does not have Wind Speed")

    return design_rate * (a + b * abs(t_space - t_out) + c * wind_speed + d * wind_speed * wind_speed)


def blast_design_flow_rate(outdoor_temp, indoor_temp, wind_speed, design_rate):
    """Design flow rate with the BLAST defaults."""
    return design_flow_rate(outdoor_temp, indoor_temp, wind_speed, design_rate, *BLAST_COEFFICIENTS)


def doe2_design_flow_rate(outdoor_temp, indoor_temp, wind_speed, design_rate):
    """Design flow rate with the DOE-2 defaults."""
    return design_flow_rate(outdoor_temp, indoor_temp, wind_speed, design_rate, *DOE2_COEFFICIENTS)


def effective_leakage_area(outdoor_temp, indoor_temp, wind_speed, area, stack_coefficient, wind_coefficient):
    """
    Calculates the infiltration of EnergyPlus'
    ZoneInfiltration:EffectiveLeakageArea (Sherman-Grimsrud):

        phi = (A_L / 1000) * sqrt(Cs|T_out - T_space| + Cw*W^2)

    Args:
        area (float): Effective leakage area (cm2).
        stack_coefficient (float): Cs, in (L/s)^2/(cm^4 K).
        wind_coefficient (float): Cw, in (L/s)^2/(cm^4 (m/s)^2).

    A missing wind speed is taken as calm (0 m/s).
    """
    t_out = _require_outdoor_temperature(outdoor_temp)
    t_space = _require_indoor_temperature(indoor_temp)
    delta_t = abs(t_out - t_space)
    ws = 0.0 if wind_speed is None else wind_speed

    return (area / 1000.0) * math.sqrt(stack_coefficient * delta_t + wind_coefficient * ws * ws)
