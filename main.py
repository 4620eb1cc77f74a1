import sys
import datetime as _dt
from loguru import logger
from pydantic import ValidationError

from config import Config, ConfigurationError, load_config_from_json
from utils import (
    log_future_value_results,
    log_input_parameters,
    log_projection_results,
    schedule_frame,
    trajectory_frame,
)
from state import derive, derive_future_value, with_changes
from plotting import plot_balance_trajectory, plot_future_value_schedule
from profile_store import load_display_name, save_display_name


def configure_logging(log_filename: str) -> None:
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level="INFO",
        colorize=True,
    )
    logger.add(
        log_filename,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        level="INFO",
        rotation="10 MB",
    )


def main(argv=None) -> int:
    """
    Main execution entry point.

    Loads the scenario, remembers the display name, runs the requested
    projection mode, logs results, and saves a chart.
    """
    argv = sys.argv[1:] if argv is None else argv
    current_timestamp_str = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = f"wcir_log_{current_timestamp_str}.log"
    configure_logging(log_filename)
    logger.info(f"Logging initialized. Log file: {log_filename}")

    if argv:
        json_filename = argv[0]
    else:
        json_filename = "config.json"
        logger.info(
            f"No config file specified via argument. Defaulting to '{json_filename}'"
        )

    logger.info(f"Loading configuration from: {json_filename}")
    try:
        config_dict = load_config_from_json(json_filename)
        config = Config(**config_dict)
        logger.info(
            f"Configuration for scenario '{config.Nickname}' loaded and validated successfully."
        )
    except ConfigurationError as e:
        logger.error(f"Configuration file error: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Configuration validation error: {e}")
        return 1

    if config.first_name:
        save_display_name(config.first_name)
    else:
        remembered = load_display_name()
        if remembered:
            config = with_changes(config, first_name=remembered)

    log_input_parameters(config)

    safe_nickname = "".join(
        c if c.isalnum() or c in ["_", "-"] else "_" for c in config.Nickname
    )
    plot_file_base = f"wcir_{safe_nickname}_{current_timestamp_str}"

    if config.mode == "future_value":
        fv = derive_future_value(config)
        log_future_value_results(config, fv)
        plot_future_value_schedule(
            schedule_frame(fv), config, f"{plot_file_base}_FV.png"
        )
    else:
        derived = derive(config)
        log_projection_results(config, derived)
        plot_balance_trajectory(
            trajectory_frame(derived.projection),
            config,
            derived,
            f"{plot_file_base}_TRAJ.png",
        )

    logger.info(
        f"--- Main execution finished for scenario '{config.Nickname}'. Outputs in current directory. Log: {log_filename} ---"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
