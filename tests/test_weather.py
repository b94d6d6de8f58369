import math

import pandas as pd
import pytest

from weather import (
    ConstantWeather,
    Date,
    SimpleSinusoidal,
    WeatherFromFile,
    get_weather_generator,
)


def test_date_hour_of_year():
    assert Date(1, 1, 0.0).hour_of_year() == 0.0
    assert Date(1, 2, 6.5).hour_of_year() == pytest.approx(30.5)
    assert Date(12, 31, 23.0).hour_of_year() == pytest.approx(8759.0)


def test_date_add_hours_wraps_around_the_year():
    assert Date(1, 1, 23.0).add_hours(1.5) == Date(1, 2, 0.5)
    assert Date(12, 31, 23.0).add_hours(2.0) == Date(1, 1, 1.0)


def test_constant_weather():
    weather = ConstantWeather(dry_bulb_temperature=5.0)
    current = weather.get_weather_data(Date(6, 1, 12.0))
    assert current.dry_bulb_temperature == 5.0
    assert current.wind_speed is None


def test_simple_sinusoidal_peaks_at_phase_shift():
    weather = SimpleSinusoidal({
        'temp_base_c': 10.0,
        'temp_amplitude_c': 5.0,
        'temp_phase_shift_hr': 15.0,
        'wind_speed_ms': 2.0,
    })
    peak = weather.get_weather_data(Date(1, 1, 15.0))
    trough = weather.get_weather_data(Date(1, 1, 3.0))
    assert peak.dry_bulb_temperature == pytest.approx(15.0)
    assert trough.dry_bulb_temperature == pytest.approx(5.0)
    assert peak.wind_speed == 2.0


@pytest.fixture
def weather_csv(tmp_path):
    path = tmp_path / "weather.csv"
    pd.DataFrame({
        'month': [1, 1, 1],
        'day': [1, 1, 1],
        'hour': [0.0, 1.0, 2.0],
        'dry_bulb_temperature': [0.0, 2.0, 4.0],
        'wind_speed': [1.0, 3.0, float('nan')],
    }).to_csv(path, index=False)
    return path


def test_weather_from_file_interpolates(weather_csv):
    weather = WeatherFromFile.from_config({'file': str(weather_csv)})
    current = weather.get_weather_data(Date(1, 1, 0.5))
    assert current.dry_bulb_temperature == pytest.approx(1.0)
    assert current.wind_speed == pytest.approx(2.0)


def test_weather_from_file_missing_column_is_none():
    weather = WeatherFromFile(pd.DataFrame({
        'month': [1, 1], 'day': [1, 1], 'hour': [0.0, 1.0],
        'dry_bulb_temperature': [0.0, 2.0],
    }))
    current = weather.get_weather_data(Date(1, 1, 0.25))
    assert current.dry_bulb_temperature == pytest.approx(0.5)
    assert current.wind_speed is None


def test_weather_from_file_requires_date_columns():
    with pytest.raises(ValueError, match="missing the columns"):
        WeatherFromFile(pd.DataFrame({'hour': [0.0]}))


def test_weather_generator_factory(weather_csv):
    assert isinstance(get_weather_generator({'type': 'constant'}), ConstantWeather)
    assert isinstance(
        get_weather_generator({'temp_base_c': 0.0, 'temp_amplitude_c': 1.0}),
        SimpleSinusoidal,
    )
    assert isinstance(get_weather_generator({'type': 'file', 'file': str(weather_csv)}), WeatherFromFile)
    with pytest.raises(ValueError, match="Unknown weather generator type"):
        get_weather_generator({'type': 'epw'})


def test_weather_from_config_requires_file():
    with pytest.raises(ValueError, match="'file' key"):
        WeatherFromFile.from_config({'type': 'file'})
