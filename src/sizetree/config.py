import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, TypedDict, cast

import yaml


class RawAppConfig(TypedDict, total=False):
    number_of_lines: int
    color: bool
    log_level: str


class RawConfigFile(TypedDict):
    config: RawAppConfig


CONFIG_FILENAME: Path = Path("sizetree.yaml")

DEFAULT_NUMBER_OF_LINES: int = 15

LOG_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def type_error(value: object) -> NoReturn:
    raise TypeError(f"Unexpected value of wrong type: {value!r}")


@dataclass(slots=True)
class AppConfig:
    number_of_lines: int = DEFAULT_NUMBER_OF_LINES
    color: bool = True
    log_level: str = "WARNING"

    @staticmethod
    def load(path: Path | None = None) -> "AppConfig":
        """
        Read the YAML config file.

        Without an explicit `path` the default file is optional and the
        built-in defaults are used when it does not exist.
        """
        if path is None:
            if not CONFIG_FILENAME.exists():
                return AppConfig()
            path = CONFIG_FILENAME
        elif not path.exists():
            raise FileNotFoundError(f"Config file {path} does not exist.")

        with path.open("r", encoding="UTF-8") as f:
            raw_loaded_obj: object | None = cast(object, yaml.safe_load(f))

        if not raw_loaded_obj:
            raise ValueError("Config file is empty or invalid YAML.")

        if not isinstance(raw_loaded_obj, dict):
            type_error(raw_loaded_obj)

        raw_dict: dict[str, object] = cast(dict[str, object], raw_loaded_obj)

        cfg_raw: object | None = raw_dict.get("config")
        if not isinstance(cfg_raw, dict):
            type_error(cfg_raw)

        cfg: RawAppConfig = cast(RawAppConfig, cast(object, cfg_raw))

        appConfig: AppConfig = AppConfig(
            number_of_lines=cfg.get("number_of_lines", DEFAULT_NUMBER_OF_LINES),
            color=cfg.get("color", True),
            log_level=str(cfg.get("log_level", "WARNING")).upper(),
        )
        appConfig.validate()

        return appConfig

    def validate(self) -> None:
        if not isinstance(self.number_of_lines, int) or isinstance(self.number_of_lines, bool):
            type_error(self.number_of_lines)
        if self.number_of_lines < 0:
            raise ValueError("number_of_lines must be >= 0")
        if not isinstance(self.color, bool):
            type_error(self.color)
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.log_level!r}")

    def to_raw(self) -> RawAppConfig:
        return {
            "number_of_lines": self.number_of_lines,
            "color": self.color,
            "log_level": self.log_level,
        }

    def dump(self) -> str:
        raw: RawConfigFile = {"config": self.to_raw()}
        return yaml.safe_dump(raw, sort_keys=False)
