"""
Version command - displays recorder version information
"""

import click

from recorder.version.recorder_version import RECORDER_VERSION


def run_version(verbose: bool = False) -> None:
    """
    Display recorder version information.

    Args:
        verbose: If True, also show the package hash and build date
    """
    if not verbose:
        click.echo(f"recorder {RECORDER_VERSION}")
        return

    click.echo(f"recorder version {RECORDER_VERSION.full_version()}")
    click.echo(f"  Build Date:   {RECORDER_VERSION.date_string()}")
    click.echo(f"  Package Hash: {RECORDER_VERSION.hash}")
