import configparser
import dataclasses
import os.path

from hexgrid.polyfill import constants
from hexgrid.polyfill.errors import DomainError
from hexgrid.polyfill.grid import validate_resolution


@dataclasses.dataclass
class Config:
    input_file: str
    resolution: int
    geodesic: bool
    output_file: str
    write_boundaries: bool
    check_containment: bool
    number: int

    def show(self):
        print()
        print("Using configuration:")
        for k, v in self.__dict__.items():
            print(f"  + {k}: {v}")


def config_parser_factory(configuration_file):
    """
    Returns a ConfigParser by reading the specified file.
    """
    if configuration_file is None or not os.path.exists(configuration_file):
        raise ValueError(f"Unable to find configuration file {configuration_file}")
    cfg_parser = configparser.ConfigParser(
        interpolation=configparser.ExtendedInterpolation()
    )
    cfg_parser.read(configuration_file)
    return cfg_parser


def _get_configuration_value(section, name, value_type, config_parser, overrides):
    """
    Returns a value from the provided config parser; any value for the key that
    is provided in the 'overrides' dictionary will take precedence.
    """
    if overrides.get(name) is not None:
        return overrides.get(name)

    if value_type is bool:
        return config_parser.getboolean(section, name)
    elif value_type is int:
        return config_parser.getint(section, name)
    else:
        return config_parser.get(section, name)


def configuration(config_parser, overrides):
    """
    Returns a Config object populated from the provided config parser, with
    values overridden by anything provided in 'overrides'.
    """
    config_parser["DEFAULT"] = {
        "resolution": constants.DEFAULT_RESOLUTION,
        "geodesic": constants.DEFAULT_GEODESIC,
        "output_file": constants.DEFAULT_OUTPUT_FILE,
        "write_boundaries": constants.DEFAULT_WRITE_BOUNDARIES,
        "check_containment": constants.DEFAULT_CHECK_CONTAINMENT,
        "number": constants.DEFAULT_NUMBER,
    }
    for section in (
        constants.SOURCE_SECTION_NAME,
        constants.GRID_SECTION_NAME,
        constants.DESTINATION_SECTION_NAME,
        constants.SETTINGS_SECTION_NAME,
    ):
        if not config_parser.has_section(section):
            config_parser.add_section(section)

    try:
        return Config(
            _get_configuration_value(constants.SOURCE_SECTION_NAME, "input_file", str, config_parser, overrides),
            _get_configuration_value(constants.GRID_SECTION_NAME, "resolution", int, config_parser, overrides),
            _get_configuration_value(constants.GRID_SECTION_NAME, "geodesic", bool, config_parser, overrides),
            _get_configuration_value(constants.DESTINATION_SECTION_NAME, "output_file", str, config_parser, overrides),
            _get_configuration_value(constants.DESTINATION_SECTION_NAME, "write_boundaries", bool, config_parser, overrides),
            _get_configuration_value(constants.SETTINGS_SECTION_NAME, "check_containment", bool, config_parser, overrides),
            _get_configuration_value(constants.SETTINGS_SECTION_NAME, "number", int, config_parser, overrides),
        )
    except (configparser.Error, ValueError) as e:
        raise ValueError(f"Unable to read the configuration file: {e}") from e


def _valid_resolution(resolution):
    try:
        validate_resolution(resolution)
    except DomainError:
        return False
    return True


def validate(configuration):
    """
    Validates each value in the configuration.
    """
    validations = [
        ["input_file", lambda name: os.path.exists(name), "The input_file does not exist."],
        ["resolution", _valid_resolution, "The resolution must be an integer from 0 to 15."],
        ["output_file", lambda name: bool(name), "The output_file must not be blank."],
    ]
    errors = [msg for name, fn, msg in validations if not fn(getattr(configuration, name))]
    return len(errors) == 0, errors
