from __future__ import annotations

import click

from planimeter.cli.compute import aoi, compute


@click.group()
def cli() -> None:
    """Geodesic polygon perimeters and areas."""


cli.add_command(compute, name="compute")
cli.add_command(aoi, name="aoi")


if __name__ == "__main__":
    cli()
