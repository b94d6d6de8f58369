"""
Contains functions for plotting simulation results.
"""
import matplotlib.pyplot as plt


def plot_infiltration_results(time_hours, results, duration_hours, show=True):
    """
    Generates plots of the infiltration simulation results.

    Args:
        time_hours (np.array): Array of time values in hours.
        results (dict): Output arrays. Must contain 'outdoor_temperature'
                        and, per space name, a dict with 'volume' and
                        'temperature' arrays under results['spaces'].
        duration_hours (float): Total simulation duration in hours.
        show (bool): Whether to display the figure.

    Returns:
        matplotlib.figure.Figure
    """
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(14, 10), sharex=True)
    fig.suptitle('Space Infiltration', fontsize=16)

    # --- Plot 1: Temperatures ---
    ax1.plot(time_hours, results['outdoor_temperature'], 'c--', label='Outside Air Temp', alpha=0.8)
    for name, space_results in results['spaces'].items():
        ax1.plot(time_hours, space_results['indoor_temperature'], ':', label=f'{name} Air Temp', lw=2)
    ax1.set_title('Temperatures')
    ax1.set_ylabel('Temperature (°C)')
    ax1.grid(True, linestyle=':', alpha=0.6)
    ax1.legend(loc='upper right')

    # --- Plot 2: Infiltration volumes ---
    for name, space_results in results['spaces'].items():
        ax2.plot(time_hours, space_results['volume'], '-', label=name, lw=2)
    ax2.set_title('Infiltration Flow Rate')
    ax2.set_ylabel('Flow (m³/s)')
    ax2.set_xlabel('Time (hours)')
    ax2.grid(True, linestyle=':', alpha=0.6)
    ax2.legend(loc='upper right')

    plt.xlim(0, duration_hours)
    plt.tight_layout(rect=[0, 0, 1, 0.96])
    if show:
        plt.show()
    return fig
