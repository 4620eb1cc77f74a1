import json
import os

from loguru import logger

from constants import DISPLAY_NAME_FILENAME

_NAME_KEY = "first_name"


def default_profile_path() -> str:
    return os.path.join(os.path.expanduser("~"), DISPLAY_NAME_FILENAME)


def load_display_name(file_path: str = "") -> str:
    """Returns the remembered first name, or '' if there is none or it can't be read."""
    path = file_path or default_profile_path()
    if not os.path.exists(path):
        return ""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read display name from '{path}': {e}")
        return ""
    name = data.get(_NAME_KEY, "") if isinstance(data, dict) else ""
    return name if isinstance(name, str) else ""


def save_display_name(name: str, file_path: str = "") -> bool:
    """
    Remembers `name` for the next run. Only the name is stored.

    Empty names are not written. Returns True when the file was written.
    """
    if not name:
        return False
    path = file_path or default_profile_path()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump({_NAME_KEY: name}, f)
    except OSError as e:
        logger.warning(f"Could not save display name to '{path}': {e}")
        return False
    logger.debug(f"Display name saved to {path}")
    return True
