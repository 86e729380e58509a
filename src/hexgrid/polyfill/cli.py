import math

import click

from hexgrid.polyfill import config, polyfill, rasterizer
from hexgrid.polyfill.errors import PolyfillError


@click.group(epilog="For detailed help on each command, run: polyfill COMMAND --help")
def cli():
    """The polyfill utility finds the hexagonal grid cells covering points,
    lines and polygons on the sphere."""
    pass


@cli.command()
@click.option("-c", "--config", help="Path to configuration file to create or replace")
def init(config):
    """Populates a configuration file based on user input."""
    click.echo(polyfill.banner())
    config = polyfill.init_config(config)
    click.echo(f"Initialized the polyfill configuration file {config}")


@cli.command()
@click.option("-c", "--config", "config_filename", help="Path to configuration file to display", required=True)
def info(config_filename):
    """Summarizes the contents of a configuration file."""
    click.echo(polyfill.banner())
    configuration = config.configuration(config.config_parser_factory(config_filename), {})
    configuration.show()


@cli.command()
@click.option("-c", "--config", "config_filename", help="Path to configuration file", required=True)
@click.option("-r", "--resolution", type=int, help="Grid resolution, overrides the configuration file.")
@click.option("-n", "--number", help="Process at most 'count' features.", metavar="count", type=int, required=False, default=None)
@click.option("--planar", is_flag=True, help="Treat line segments as straight in lat/lng instead of great circles.")
@click.option("--check-containment", is_flag=True, help="Re-check the centroid of every filled cell.")
def process(config_filename, resolution, number, planar, check_containment):
    """Rasterizes every feature in the configured input file."""
    click.echo(polyfill.banner())
    overrides = {
        "resolution": resolution,
        "number": number,
        "geodesic": False if planar else None,
        "check_containment": check_containment or None,
    }
    try:
        configuration = config.configuration(config.config_parser_factory(config_filename), overrides)
        polyfill.init_logging()
        polyfill.process(configuration)
    except (PolyfillError, ValueError, OSError) as e:
        print("\nUnable to process data: " + str(e))
        exit(1)
    click.echo(f"Processed features using the configuration file {config_filename}")


@cli.command()
@click.argument("lat", type=float)
@click.argument("lng", type=float)
@click.option("-r", "--resolution", type=int, required=True, help="Grid resolution, 0 to 15.")
def cell(lat, lng, resolution):
    """Prints the cell containing the point LAT LNG (degrees)."""
    try:
        click.echo(rasterizer.rasterize_point((math.radians(lat), math.radians(lng)), resolution))
    except PolyfillError as e:
        raise click.ClickException(str(e))


if __name__ == "__main__":
    cli()
