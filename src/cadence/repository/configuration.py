# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from cadence import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        loaded = None
        if configuration.APP_CONFIG_PATH.is_file():
            loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        # Fill in any settings missing from older config files
        self._config = configuration.get_default_configuration()
        if loaded is not None:
            self._config.update(loaded)

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def reset(self) -> None:
        """Forget the cached configuration so the next read reloads the file."""
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        show_header: Optional[bool] = None,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        default_review_time: Optional[str] = None,
        fallback_review_hours: Optional[int] = None,
        monitor_interval_seconds: Optional[int] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if show_header is not None:
            self.config["show_header"] = show_header
        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if default_review_time is not None:
            self.config["default_review_time"] = default_review_time
        if fallback_review_hours is not None:
            self.config["fallback_review_hours"] = fallback_review_hours
        if monitor_interval_seconds is not None:
            self.config["monitor_interval_seconds"] = monitor_interval_seconds
        if log_level is not None:
            self.config["log_level"] = log_level


CONFIGURATION_REPO = ConfigurationRepository()
