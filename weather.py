"""
Defines the weather sources used by the simulation. Every source exposes
get_weather_data(date), which returns the CurrentWeather for that instant.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

HOURS_PER_YEAR = 8760
# Dates are placed on a non-leap year
_REFERENCE_YEAR = 2001


@dataclass(frozen=True)
class Date:
    """A date within a typical (non-leap) year. `hour` may be fractional."""
    month: int
    day: int
    hour: float

    def _as_datetime(self):
        return datetime(_REFERENCE_YEAR, self.month, self.day) + timedelta(hours=self.hour)

    def hour_of_year(self):
        """Hours elapsed since January 1st, 00:00."""
        delta = self._as_datetime() - datetime(_REFERENCE_YEAR, 1, 1)
        return delta.total_seconds() / 3600.0

    def add_hours(self, hours):
        """Returns a new Date `hours` later, wrapping around the end of the year."""
        dt = self._as_datetime() + timedelta(hours=hours)
        if dt.year != _REFERENCE_YEAR:
            dt = dt.replace(year=_REFERENCE_YEAR)
        hour = dt.hour + dt.minute / 60.0 + dt.second / 3600.0
        return Date(month=dt.month, day=dt.day, hour=hour)


@dataclass(frozen=True)
class CurrentWeather:
    """Weather sample for a single timestep. Missing fields are None."""
    dry_bulb_temperature: Optional[float] = None
    wind_speed: Optional[float] = None


class ConstantWeather:
    """
    Returns the same weather for every date. Useful for tests and for
    design-day style calculations.
    """
    def __init__(self, dry_bulb_temperature=None, wind_speed=None):
        self.current = CurrentWeather(dry_bulb_temperature, wind_speed)

    @classmethod
    def from_config(cls, config):
        return cls(config.get('dry_bulb_temperature_c'), config.get('wind_speed_ms'))

    def get_weather_data(self, date):
        return self.current


class SimpleSinusoidal:
    """
    Generates a simple sinusoidal weather profile based on config parameters.
    """
    def __init__(self, config):
        """
        Initializes the weather generator.

        Args:
            config (dict): The 'weather' section of the main config dictionary.
        """
        self.temp_base = config['temp_base_c']
        self.temp_amp = config['temp_amplitude_c']
        self.temp_phase = config.get('temp_phase_shift_hr', 15.0)
        self.wind_speed = config.get('wind_speed_ms', 3.0)

    def get_weather_data(self, date):
        t_hr = date.hour
        # Calculate air temperature based on a sinusoidal model
        air_temp = (self.temp_base +
                    self.temp_amp * math.cos(2 * math.pi * (t_hr - self.temp_phase) / 24))
        return CurrentWeather(dry_bulb_temperature=air_temp, wind_speed=self.wind_speed)


class WeatherFromFile:
    """
    Reads hourly weather from a CSV file and interpolates it linearly to
    any date. The file needs 'month', 'day' and 'hour' columns, plus
    'dry_bulb_temperature' and/or 'wind_speed'. Columns that are absent
    yield None in every sample.
    """
    FIELDS = ('dry_bulb_temperature', 'wind_speed')

    def __init__(self, df):
        """
        Args:
            df (pd.DataFrame): Hourly weather records.
        """
        self.df_hourly = self._load(df)

    @classmethod
    def from_config(cls, config):
        """
        Reads the weather file named in the config.

        Args:
            config (dict): The 'weather' section of the main config
                           dictionary. Must contain a 'file' key.
        """
        path = config.get('file')
        if not path:
            raise ValueError("WeatherFromFile requires a 'file' key in the weather config.")
        source = cls(pd.read_csv(path))
        logger.info(f"Loaded {len(source.df_hourly)} weather records from '{path}'")
        return source

    @classmethod
    def _load(cls, df):
        missing = [c for c in ('month', 'day', 'hour') if c not in df.columns]
        if missing:
            raise ValueError(f"Weather data is missing the columns {missing}")
        if df.empty:
            raise ValueError("Weather data is empty.")

        df = df.copy()
        df['hour_of_year'] = [
            Date(int(m), int(d), float(h)).hour_of_year()
            for m, d, h in zip(df['month'], df['day'], df['hour'])
        ]
        return df.sort_values('hour_of_year').reset_index(drop=True)

    def _interpolate(self, column, hour_of_year):
        if column not in self.df_hourly.columns:
            return None
        series = self.df_hourly[['hour_of_year', column]].dropna()
        if series.empty:
            return None
        # Periodic interpolation so that the last record connects to the first
        value = np.interp(
            hour_of_year,
            series['hour_of_year'].to_numpy(),
            series[column].to_numpy(dtype=np.float64),
            period=HOURS_PER_YEAR,
        )
        return float(value)

    def get_weather_data(self, date):
        hour_of_year = date.hour_of_year()
        values = {field: self._interpolate(field, hour_of_year) for field in self.FIELDS}
        return CurrentWeather(**values)


# --- Weather Generator Factory ---

WEATHER_GENERATOR_MAP = {
    "constant": ConstantWeather.from_config,
    "simple_sinusoidal": SimpleSinusoidal,
    "file": WeatherFromFile.from_config,
}


def get_weather_generator(config):
    """
    Factory function to get the appropriate weather generator instance.

    Args:
        config (dict): The 'weather' section of the simulation configuration.

    Returns:
        An instance of a weather generator class.
    """
    # Default to simple_sinusoidal if 'type' key is missing
    weather_type = config.get("type", "simple_sinusoidal")

    generator = WEATHER_GENERATOR_MAP.get(weather_type)
    if not generator:
        raise ValueError(f"Unknown weather generator type: '{weather_type}'. "
                         f"Available types are: {list(WEATHER_GENERATOR_MAP.keys())}")

    return generator(config)
