import configparser
import logging
from pathlib import Path

from appdirs import AppDirs

from .brush import LineStyle
from .pattern import StyleParameters, MIN_LINE_WIDTH, MAX_LINE_WIDTH
from .util import parse_color

gingham_dirs = AppDirs("gingham")

CONFIG_HOME = Path(gingham_dirs.user_config_dir)
CONFIG_FILE = CONFIG_HOME / "gingham.ini"

DEFAULT_WORKERS = 4


logger = logging.getLogger(__name__)


def _get(section, key, parse, default):
    value = section.get(key)
    if value is None:
        return default
    try:
        return parse(value)
    except (ValueError, KeyError):
        logger.warning("Bad value %r for %s in config, using %r", value, key, default)
        return default


def _line_width(value):
    width = int(value)
    if not MIN_LINE_WIDTH <= width <= MAX_LINE_WIDTH:
        raise ValueError(width)
    return width


def _workers(value):
    workers = int(value)
    if workers < 1:
        raise ValueError(workers)
    return workers


def load_config(path=CONFIG_FILE):
    config_file = configparser.ConfigParser()
    config_file.read(path)
    config = {}

    if "logging" in config_file:
        level = config_file["logging"].get("level", "INFO")
        logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO))
    else:
        logging.basicConfig(level=logging.INFO)

    defaults = StyleParameters()
    if "gingham" in config_file:
        section = config_file["gingham"]
        config["default_params"] = StyleParameters(
            line_width=_get(section, "line_width", _line_width, defaults.line_width),
            color=_get(section, "color", parse_color, defaults.color),
            horizontal_style=_get(section, "horizontal_style", LineStyle.from_string,
                                  defaults.horizontal_style),
            vertical_style=_get(section, "vertical_style", LineStyle.from_string,
                                defaults.vertical_style),
        )
        config["workers"] = _get(section, "workers", _workers, DEFAULT_WORKERS)
    else:
        config["default_params"] = defaults
        config["workers"] = DEFAULT_WORKERS

    return config
