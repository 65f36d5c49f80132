# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "cadence"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_NOTES_PATH: Path = DATA_PATH / "notes.yaml"
DATA_REVIEWS_PATH: Path = DATA_PATH / "reviews.yaml"

DEFAULT_REVIEW_TIME = "09:00"
DEFAULT_FALLBACK_REVIEW_HOURS = 12
DEFAULT_MONITOR_INTERVAL_SECONDS = 1
DEFAULT_LOG_LEVEL = "WARNING"


class Configuration(TypedDict):
    show_header: bool
    data_path: Optional[str]
    default_review_time: str
    fallback_review_hours: int
    monitor_interval_seconds: int
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "show_header": True,
        "data_path": None,
        "default_review_time": DEFAULT_REVIEW_TIME,
        "fallback_review_hours": DEFAULT_FALLBACK_REVIEW_HOURS,
        "monitor_interval_seconds": DEFAULT_MONITOR_INTERVAL_SECONDS,
        "log_level": DEFAULT_LOG_LEVEL,
    }


def set_data_path(data_path: Path) -> None:
    global DATA_PATH, DATA_NOTES_PATH, DATA_REVIEWS_PATH

    DATA_PATH = data_path
    DATA_NOTES_PATH = DATA_PATH / "notes.yaml"
    DATA_REVIEWS_PATH = DATA_PATH / "reviews.yaml"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are read.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting).expanduser())
