import pandas as pd
from loguru import logger

from config import Config
from constants import MONTHS_PER_YEAR
from formatting import currency_format, percent, timeline_statement
from projection import FutureValueResult, TrackProjectionResult
from state import DerivedOutputs, in_todays_money


def log_input_parameters(config: Config) -> None:
    """Logs the input parameters for the projection."""
    logger.info(f"--- Input Parameters For Scenario: {config.Nickname} ---")
    config_as_dict_for_logging = config.model_dump(by_alias=False)
    for key, value in config_as_dict_for_logging.items():
        if key == "Nickname":
            continue
        if key == "first_name":
            if value:
                logger.info(f"First Name: {value}")
            continue
        if isinstance(value, float) and key.endswith("_pct"):
            logger.info(f"{key.replace('_', ' ').title()}: {value:.2f}%")
        elif isinstance(value, float) and any(
            curr_kw in key
            for curr_kw in ["principal", "balance", "contribution", "spend"]
        ):
            logger.info(
                f"{key.replace('_', ' ').title()}: {currency_format(value, config.currency)}"
            )
        else:
            logger.info(f"{key.replace('_', ' ').title()}: {value}")
    logger.info("--- End of Input Parameters ---")


def log_projection_results(config: Config, derived: DerivedOutputs) -> None:
    """Logs the outcome of a target-seeking projection."""
    result = derived.projection
    greeting = f"{config.first_name}, here" if config.first_name else "Here"
    logger.info(f"--- {greeting} is the timeline for scenario '{config.Nickname}' ---")
    logger.info(f"Real Return (Inflation Adjusted): {percent(derived.real_return)}")
    if len(result.track_balances) > 1:
        logger.info(
            f"Savings Real Return (Inflation Adjusted): {percent(derived.savings_real_return)}"
        )
    logger.info(
        f"Target Nest Egg (Today's Money): {currency_format(derived.target_nest_egg, config.currency)}"
    )
    logger.info(
        f"Time To Target: {timeline_statement(result, derived.eta, config.max_years)}"
    )
    logger.info(
        f"Months Simulated: {result.months} ({result.months / MONTHS_PER_YEAR:.1f} years)"
    )
    logger.info(
        f"Balance At Stop: {currency_format(result.final_balance, config.currency)}"
    )
    logger.info(
        f"Total Invested: {currency_format(derived.total_invested, config.currency)}"
    )
    if not result.target_reached:
        logger.warning(
            f"Target not reached within {config.max_years:g} years for '{config.Nickname}'."
        )


def log_future_value_results(config: Config, fv: FutureValueResult) -> None:
    """Logs the outcome of a fixed-horizon projection."""
    logger.info(
        f"--- Future Value After {config.horizon_years} Years for '{config.Nickname}' ---"
    )
    logger.info(
        f"Compounding: {config.compounding_frequency}, Contributions: {config.contribution_frequency}"
    )
    logger.info(f"Final Balance: {currency_format(fv.final_balance, config.currency)}")
    logger.info(
        f"Final Balance (Today's Money): "
        f"{currency_format(in_todays_money(fv.final_balance, config.inflation_pct, config.horizon_years), config.currency)}"
    )
    logger.info(
        f"Total Contributions: {currency_format(fv.total_contributions, config.currency)}"
    )
    logger.info(f"Total Growth: {currency_format(fv.total_growth, config.currency)}")


def trajectory_frame(projection: TrackProjectionResult) -> pd.DataFrame:
    """
    Year-by-year combined balance of a recorded projection.

    The last row is the stopping month, which lands mid-year unless the
    projection ended on a year boundary.
    """
    trajectory = list(projection.yearly_trajectory)
    if not trajectory:
        return pd.DataFrame(columns=["Year", "Balance"])
    years = [float(y) for y in range(len(trajectory))]
    if projection.months % MONTHS_PER_YEAR != 0:
        years[-1] = projection.months / MONTHS_PER_YEAR
    return pd.DataFrame({"Year": years, "Balance": trajectory})


def schedule_frame(fv: FutureValueResult) -> pd.DataFrame:
    frame = pd.DataFrame(
        [
            {
                "Year": row.year,
                "Balance": row.balance,
                "Contributions": row.contributions,
            }
            for row in fv.schedule
        ]
    )
    frame["Growth"] = frame["Balance"] - frame["Balance"].iloc[0] - frame["Contributions"]
    return frame
