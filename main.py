"""
Main script to set up and run an infiltration simulation from a
JSON configuration file.

The spaces' indoor temperatures are held fixed at the values given in the
configuration; the air-flow model calculates the infiltration volume and
temperature of every space on each timestep.
"""
import argparse
import datetime
import json
import logging
import os
import sys

import numpy as np
import pandas as pd

from airflow_model import AirFlowModel
from building import create_simple_model
from exceptions import AirFlowConfigurationError
from plotting import plot_infiltration_results
from simulation_state import SimulationStateElement, SimulationStateHeader
from weather import Date, get_weather_generator

logger = logging.getLogger(__name__)


def run_simulation(config):
    """
    Runs the simulation described by a configuration dictionary.

    Returns:
        tuple: (time_hours, results) where results holds the outdoor
               temperature and, per space, the indoor temperature and the
               infiltration volume and temperature arrays.
    """
    # --- 1. Simulation Setup from Config ---
    sim_settings = config['simulation_settings']
    dt_minutes = sim_settings['dt_minutes']
    duration_days = sim_settings['duration_days']
    duration_hours = duration_days * 24
    dt_hours = dt_minutes / 60.0
    num_steps = int(duration_hours / dt_hours)

    time_hours = np.arange(num_steps) * dt_hours
    start_date = Date(
        month=sim_settings.get('start_month', 1),
        day=sim_settings.get('start_day', 1),
        hour=sim_settings.get('start_hour', 0.0),
    )

    # --- 2. Building model and weather ---
    model = create_simple_model(config)
    weather = get_weather_generator(config.get('weather', {}))

    # --- 3. Register state ---
    header = SimulationStateHeader()
    indoor_temperatures = {}
    for i, (space, space_props) in enumerate(zip(model.spaces, config['spaces'])):
        t_indoor = space_props.get('indoor_temperature_c', 22.0)
        indoor_temperatures[space.name] = t_indoor
        space.dry_bulb_temperature_index = header.push(
            SimulationStateElement.space_dry_bulb_temperature(i), t_indoor
        )

    airflow = AirFlowModel(model, header, num_steps)
    state = header.take_values()

    # --- Result Arrays ---
    outdoor_temperature = np.full(num_steps, np.nan)
    results = {
        'outdoor_temperature': outdoor_temperature,
        'spaces': {
            space.name: {
                'indoor_temperature': np.full(num_steps, indoor_temperatures[space.name]),
                'volume': np.zeros(num_steps),
                'temperature': np.zeros(num_steps),
            }
            for space in model.spaces
        },
    }

    # --- 4. Main loop ---
    logger.info(f"Running {num_steps} steps of {dt_minutes} minutes")
    for t in range(num_steps):
        date = start_date.add_hours(time_hours[t])
        airflow.march(date, weather, model, state)

        current = weather.get_weather_data(date)
        if current.dry_bulb_temperature is not None:
            outdoor_temperature[t] = current.dry_bulb_temperature
        for space in model.spaces:
            space_results = results['spaces'][space.name]
            space_results['volume'][t] = space.infiltration_volume(state)
            space_results['temperature'][t] = space.infiltration_temperature(state)

    logger.info("Simulation complete.")
    return time_hours, results


def results_to_dataframe(time_hours, results):
    """Flattens the results into one column per space and quantity."""
    columns = {
        'Time (hrs)': time_hours,
        'Outside Temp (C)': results['outdoor_temperature'],
    }
    for name, space_results in results['spaces'].items():
        columns[f'{name} Infiltration Volume (m3/s)'] = space_results['volume']
        columns[f'{name} Infiltration Temp (C)'] = space_results['temperature']
    return pd.DataFrame(columns)


def run_simulation_from_config(config_path, plot=True, results_root="results"):
    """
    Loads a JSON configuration, runs the simulation, saves the results to
    disk and optionally plots them.
    """
    start_dt = datetime.datetime.now()

    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logger.error(f"Configuration file not found at '{config_path}'")
        sys.exit(1)
    except json.JSONDecodeError:
        logger.error(f"Could not parse JSON in configuration file '{config_path}'.")
        sys.exit(1)

    try:
        time_hours, results = run_simulation(config)
    except KeyError as e:
        logger.error(f"Missing or invalid key in configuration file '{config_path}': "
                     f"the required key {e} was not found or is nested incorrectly.")
        sys.exit(1)
    except AirFlowConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    # --- Save results ---
    date_str = start_dt.strftime("%Y-%m-%d")
    time_str = start_dt.strftime("%H-%M-%S")
    results_dir = os.path.join(results_root, date_str)
    os.makedirs(results_dir, exist_ok=True)

    duration_days = config['simulation_settings']['duration_days']
    csv_save_path = os.path.join(results_dir, f"{date_str}_{time_str}_{duration_days}days_infiltration.csv")
    results_to_dataframe(time_hours, results).to_csv(csv_save_path, index=False, float_format="%.6f")
    logger.info(f"Saved simulation results to: {csv_save_path}")

    if plot:
        plot_infiltration_results(time_hours, results, duration_days * 24)

    return csv_save_path


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Run a space infiltration simulation from a JSON config file."
    )
    parser.add_argument(
        'config_file',
        type=str,
        nargs='?',
        default='simulation_config.json',
        help="Path to the simulation JSON configuration file (default: simulation_config.json)"
    )
    parser.add_argument('--no-plot', action='store_true', help="Do not display the result plots")
    parser.add_argument('--results-dir', default='results', help="Directory where results are saved")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_simulation_from_config(args.config_file, plot=not args.no_plot, results_root=args.results_dir)


if __name__ == '__main__':
    main()
