"""Home command - validates and describes the recorder home directory."""

import sys

import click

from recorder.home.store import RecorderHome, RecorderHomeError


def run_home(directory: str | None = None, properties_file: str | None = None) -> None:
    """
    Show the recorder home, creating it when missing.

    Args:
        directory: Home directory; RECORDER_HOME or ~/.ngrinder_recorder when None
        properties_file: Properties file inside the home to print, if any
    """
    try:
        home = RecorderHome(directory) if directory else RecorderHome.from_env()
    except RecorderHomeError as e:
        click.echo(f"Error: {e}")
        sys.exit(1)

    click.echo(f"Home directory: {home.directory}")
    click.echo(f"Log directory:  {home.log_directory}")

    if properties_file:
        properties = home.get_properties(properties_file)
        click.echo(f"\n{properties_file} ({len(properties)} entries)")
        for key, value in sorted(properties.items()):
            click.echo(f"  {key}={value}")
