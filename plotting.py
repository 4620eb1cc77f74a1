import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from loguru import logger
from matplotlib.ticker import FuncFormatter

from config import Config
from constants import TEXT_INPUT_COLOR, TEXT_OUTPUT_COLOR, CURRENCY_SYMBOLS
from formatting import currency_format, percent, short_duration
from state import DerivedOutputs


def _escape_dollars(text: str) -> str:
    # A pair of "$" would switch matplotlib into mathtext.
    return text.replace("$", r"\$")


def _thousands_formatter(symbol: str) -> FuncFormatter:
    symbol = _escape_dollars(symbol)

    def formatter(x_val, pos):
        if abs(x_val) >= 1e6:
            return f"{symbol}{x_val / 1e6:.1f}M"
        return f"{symbol}{x_val / 1e3:.0f}k"

    return FuncFormatter(formatter)


def _draw_text_block(ax, lines, y_start: float, color: str, bold: bool = False) -> None:
    line_spacing_val = 0.04
    for i, line_text in enumerate(lines):
        ax.text(
            0.02,
            y_start - i * line_spacing_val,
            _escape_dollars(line_text),
            transform=ax.transAxes,
            ha="left",
            va="top",
            fontsize=7,
            color=color,
            fontweight="bold" if bold else "normal",
            bbox=dict(
                facecolor="white",
                alpha=0.80,
                pad=2,
                edgecolor="lightgrey",
                boxstyle="round,pad=0.3",
            ),
        )


def plot_balance_trajectory(
    trajectory_df: pd.DataFrame,
    input_config: Config,
    derived: DerivedOutputs,
    filename: str,
    dpi_setting: int = 150,
) -> bool:
    """
    Plots the projected balance against the target nest egg.

    Args:
        trajectory_df: Frame with 'Year' and 'Balance' columns (see utils.trajectory_frame).
        input_config: Scenario the projection was run for.
        derived: Outputs derived from `input_config`.
        filename: Where to save the image.
        dpi_setting: The DPI (dots per inch) for the saved image.

    Returns:
        True if the image was written.
    """
    if trajectory_df is None or trajectory_df.empty:
        logger.warning(f"No trajectory data to plot for '{filename}'. Skipping.")
        return False

    p = input_config
    result = derived.projection
    symbol = CURRENCY_SYMBOLS.get(p.currency, "")

    plt.figure(figsize=(12, 7))
    ax = plt.gca()

    years_x_axis = trajectory_df["Year"].to_numpy(dtype=float)
    balances = trajectory_df["Balance"].to_numpy(dtype=float)
    # An infinite real return (inflation of -100%) leaves nothing drawable past month 0.
    finite = np.isfinite(balances)
    years_x_axis, balances = years_x_axis[finite], balances[finite]

    ax.plot(years_x_axis, balances, color="blue", linewidth=1.8, label="Projected Balance")
    ax.fill_between(
        years_x_axis,
        np.zeros_like(balances),
        balances,
        color="skyblue",
        alpha=0.25,
        interpolate=True,
    )
    ax.axhline(
        derived.target_nest_egg,
        color="green",
        linestyle="--",
        linewidth=1.2,
        label=_escape_dollars(
            f"Target ({currency_format(derived.target_nest_egg, p.currency)})"
        ),
    )
    if result.target_reached:
        ax.axvline(
            x=float(trajectory_df["Year"].iloc[-1]),
            color="black",
            linestyle="--",
            linewidth=1.2,
            label=f"Target Reached ({short_duration(result, p.max_years)})",
        )

    input_lines = [
        f"Scenario: {p.Nickname}",
        f"Principal: {currency_format(p.principal, p.currency)}, "
        f"Contr: {currency_format(p.contribution, p.currency)} ({p.contribution_frequency})",
        f"Return: {p.nominal_return_pct:.1f}% nominal, Inflation: {p.inflation_pct:.1f}%",
        f"Spend: {currency_format(p.annual_spend, p.currency)}/yr @ {p.withdrawal_pct:.1f}% withdrawal",
    ]
    output_lines = [
        f"Real Return: {percent(derived.real_return)}",
        f"Time To Target: {short_duration(result, p.max_years)}",
        f"Total Invested: {currency_format(derived.total_invested, p.currency)}",
    ]
    _draw_text_block(ax, input_lines, 0.78, TEXT_INPUT_COLOR)
    _draw_text_block(ax, output_lines, 0.78 - 0.04 * (len(input_lines) + 1), TEXT_OUTPUT_COLOR, bold=True)

    ax.yaxis.set_major_formatter(_thousands_formatter(symbol))
    plt.title(f"Projected Balance: {p.Nickname}", fontsize=14)
    plt.xlabel("Years From Today", fontsize=10)
    plt.ylabel(f"Balance in Today's Money ({p.currency})", fontsize=10)
    ax.legend(fontsize=7, loc="upper left", bbox_to_anchor=(0.01, 0.98))
    plt.grid(True, linestyle=":", alpha=0.6)
    plt.tight_layout()

    saved = True
    try:
        plt.savefig(filename, dpi=dpi_setting)
        logger.info(f"Trajectory plot saved to {filename}")
    except OSError as e:
        logger.error(f"Error saving trajectory plot '{filename}': {e}")
        saved = False
    plt.close()
    return saved


def plot_future_value_schedule(
    schedule_df: pd.DataFrame,
    input_config: Config,
    filename: str,
    dpi_setting: int = 150,
) -> bool:
    """Stacked bars of contributed money and growth for each year of a future-value projection."""
    if schedule_df is None or schedule_df.empty:
        logger.warning(f"No schedule data to plot for '{filename}'. Skipping.")
        return False

    p = input_config
    symbol = CURRENCY_SYMBOLS.get(p.currency, "")
    plt.figure(figsize=(12, 7))
    ax = plt.gca()

    years = schedule_df["Year"].to_numpy()
    start = np.full(len(years), float(schedule_df["Balance"].iloc[0]))
    contributions = schedule_df["Contributions"].to_numpy(dtype=float)
    growth = schedule_df["Growth"].to_numpy(dtype=float)

    ax.bar(years, start, color="grey", alpha=0.6, label="Starting Balance")
    ax.bar(years, contributions, bottom=start, color="skyblue", label="Contributions")
    ax.bar(years, growth, bottom=start + contributions, color="seagreen", label="Growth")

    ax.yaxis.set_major_formatter(_thousands_formatter(symbol))
    plt.title(
        f"Future Value Over {p.horizon_years} Years: {p.Nickname} "
        f"({p.nominal_return_pct:.1f}% compounded {p.compounding_frequency})",
        fontsize=13,
    )
    plt.xlabel("Year", fontsize=10)
    plt.ylabel(f"Balance ({p.currency})", fontsize=10)
    ax.legend(fontsize=8, loc="upper left")
    plt.grid(True, axis="y", linestyle=":", alpha=0.6)
    plt.tight_layout()

    saved = True
    try:
        plt.savefig(filename, dpi=dpi_setting)
        logger.info(f"Future value plot saved to {filename}")
    except OSError as e:
        logger.error(f"Error saving future value plot '{filename}': {e}")
        saved = False
    plt.close()
    return saved
