# SPDX-License-Identifier: MIT

from typing import Any

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from cadence import configuration
from cadence.log import setup_logging
from cadence.repository.configuration import CONFIGURATION_REPO
from cadence.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    setup_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_NOTES_PATH.is_file():
        notes: dict[str, Any] = {"notes": []}
        configuration.DATA_NOTES_PATH.write_text(dump(notes, Dumper=Dumper))
    if not configuration.DATA_REVIEWS_PATH.is_file():
        reviews: dict[str, Any] = {"reviews": {}}
        configuration.DATA_REVIEWS_PATH.write_text(dump(reviews, Dumper=Dumper))
