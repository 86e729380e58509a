import configparser
import csv
import dataclasses
import datetime as dt
import logging
import os.path
import sys
from typing import List, Optional, Set

from funcy import decorator, take
from pyfiglet import Figlet
from rich.prompt import Confirm, Prompt
from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from hexgrid.polyfill import config, constants, features
from hexgrid.polyfill.errors import InvalidArgumentError, PolyfillError
from hexgrid.polyfill.grid import CellId, default_grid

LOGGER_NAME = "hexgrid.polyfill"
CONSOLE_FORMAT = "%(message)s"
LOGFILE_FORMAT = "%(asctime)s|%(levelname)s|%(name)s|%(message)s"


def init_logging(logfile="polyfill.log"):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    logfile_handler = logging.FileHandler(logfile, "w")
    logfile_handler.setLevel(logging.DEBUG)
    logfile_handler.setFormatter(logging.Formatter(LOGFILE_FORMAT))
    logger.addHandler(logfile_handler)


@decorator
def log(call):
    logging.getLogger(LOGGER_NAME).info(call._func.__name__)
    return call()


def banner():
    """
    Displays the name of this utility using incredible ASCII-art.
    """
    f = Figlet(font="slant")
    return f.renderText("polyfill")


def init_config(configuration_file):
    """
    Prompts the user for configuration values and then creates a valid configuration file.
    """
    print("""This utility will create a polyfill configuration file by prompting """
          """you for values for each of the configuration parameters.""")
    print()
    if not configuration_file:
        configuration_file = Prompt.ask("configuration file name", default="example.ini")
    else:
        print(f"Creating configuration file {configuration_file}")
        print()

    if os.path.exists(configuration_file):
        print(f"WARNING: The {configuration_file} already exists.")
        overwrite = Confirm.ask("Overwrite?")
        if not overwrite:
            print("Not overwriting existing file. Exiting.")
            exit(1)

    cfg_parser = configparser.ConfigParser()

    print()
    print(f"{constants.SOURCE_SECTION_NAME} Parameters")
    print("--------------------------------------------------")
    cfg_parser.add_section(constants.SOURCE_SECTION_NAME)
    cfg_parser.set(constants.SOURCE_SECTION_NAME, "input_file", Prompt.ask("Input file of WKT features", default="features.wkt"))

    print()
    print(f"{constants.GRID_SECTION_NAME} Parameters")
    print("--------------------------------------------------")
    cfg_parser.add_section(constants.GRID_SECTION_NAME)
    cfg_parser.set(constants.GRID_SECTION_NAME, "resolution", Prompt.ask("Resolution (0-15)", default=str(constants.DEFAULT_RESOLUTION)))
    cfg_parser.set(constants.GRID_SECTION_NAME, "geodesic", Prompt.ask("Geodesic lines? (True/False)", default=str(constants.DEFAULT_GEODESIC)))

    print()
    print(f"{constants.DESTINATION_SECTION_NAME} Parameters")
    print("--------------------------------------------------")
    cfg_parser.add_section(constants.DESTINATION_SECTION_NAME)
    cfg_parser.set(constants.DESTINATION_SECTION_NAME, "output_file", Prompt.ask("Output file", default=constants.DEFAULT_OUTPUT_FILE))
    cfg_parser.set(constants.DESTINATION_SECTION_NAME, "write_boundaries", Prompt.ask("Write cell boundaries? (True/False)", default=str(constants.DEFAULT_WRITE_BOUNDARIES)))

    print()
    print(f"{constants.SETTINGS_SECTION_NAME} Parameters")
    print("--------------------------------------------------")
    cfg_parser.add_section(constants.SETTINGS_SECTION_NAME)
    cfg_parser.set(constants.SETTINGS_SECTION_NAME, "check_containment", Prompt.ask("Re-check containment of filled cells? (True/False)", default=str(constants.DEFAULT_CHECK_CONTAINMENT)))

    print()
    print(f"Saving new configuration: {configuration_file}")
    with open(configuration_file, "tw") as file:
        cfg_parser.write(file)

    return configuration_file


# -------------------------------------------------------------------

@dataclasses.dataclass
class Feature:
    index: int
    geometry: BaseGeometry
    cells: Set[CellId] = dataclasses.field(default_factory=set)
    startDatetime: Optional[dt.datetime] = None
    endDatetime: Optional[dt.datetime] = None

# -------------------------------------------------------------------


def process(configuration: config.Config) -> List[Feature]:
    """
    Rasterizes every feature in the configured input file and writes the
    resulting cell table. Any error aborts processing; nothing is written
    for a run that fails.
    """
    valid, errors = config.validate(configuration)
    if not valid:
        raise InvalidArgumentError("Invalid configuration: " + " ".join(errors))

    geometries = read_features(configuration.input_file)
    if configuration.number > 0:
        geometries = take(configuration.number, geometries)

    results = [
        rasterize_feature(configuration, Feature(i, geom))
        for i, geom in enumerate(geometries, start=1)
    ]

    write_cells(configuration, results)
    summarize_results(results)

    return results


@log
def read_features(input_file: str) -> List[BaseGeometry]:
    """
    Reads one WKT geometry per non-blank line; '#' starts a comment line.
    """
    geometries = []
    with open(input_file, "tr") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                geometries.append(wkt.loads(line))
            except ShapelyError as e:
                raise InvalidArgumentError(
                    f"Unable to parse WKT on line {line_number} of {input_file}: {e}"
                ) from e
    return geometries


def rasterize_feature(configuration: config.Config, feature: Feature) -> Feature:
    start = dt.datetime.now()
    try:
        cells = features.geometry_to_cells(
            feature.geometry,
            configuration.resolution,
            geodesic=configuration.geodesic,
            check_containment=configuration.check_containment,
        )
    except PolyfillError as e:
        raise e.locate(feature=feature.index)

    logging.getLogger(LOGGER_NAME).debug(
        f"Feature {feature.index} ({feature.geometry.geom_type}): {len(cells)} cells"
    )
    return dataclasses.replace(
        feature,
        cells=cells,
        startDatetime=start,
        endDatetime=dt.datetime.now(),
    )


@log
def write_cells(configuration: config.Config, results: List[Feature]) -> None:
    grid = default_grid()
    with open(configuration.output_file, "tw", newline="") as f:
        writer = csv.writer(f)
        header = ["feature", "cell"]
        if configuration.write_boundaries:
            header.append("boundary")
        writer.writerow(header)

        for feature in results:
            cells = sorted(feature.cells)
            if configuration.write_boundaries:
                outlines = features.cells_to_polygons(cells, grid)
                for cell, outline in zip(cells, outlines):
                    writer.writerow([feature.index, cell, outline.wkt])
            else:
                for cell in cells:
                    writer.writerow([feature.index, cell])


def summarize_results(results: List[Feature]) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.info("Processing Summary")
    logger.info("==================")
    logger.info(f"Features: {len(results)}")
    if results:
        logger.info(f"Start: {results[0].startDatetime}")
        logger.info(f"End: {results[-1].endDatetime}")
    logger.info(f"Cells: {sum(len(r.cells) for r in results)}")
    logger.info(f"Empty features: {len([r for r in results if not r.cells])}")
