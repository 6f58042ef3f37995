#!/usr/bin/env python3
"""Recorder CLI - local network discovery and home directory helpers."""

import click

from recorder.commands.net_cmd import (
    run_address,
    run_download,
    run_hostname,
    run_lookup,
    run_port,
    run_validate_ip,
)
from recorder.utils.env import get_env
from recorder.utils.logger import Logger


@click.group()
@click.option("--debug", is_flag=True, help="Log every resolution step to stderr")
def recorder(debug):
    """Recorder command-line tool for local network discovery."""
    # Logs go to stderr so stdout carries only the answer
    if not Logger.is_configured():
        level = get_env("RECORDER_LOG_LEVEL", default="WARNING")
        try:
            Logger.configure(level=level, output="stderr", timestamps=True)
        except ValueError:
            click.echo(
                f"Warning: unknown RECORDER_LOG_LEVEL '{level}', using WARNING",
                err=True,
            )
            Logger.configure(level="WARNING", output="stderr", timestamps=True)
    if debug:
        Logger.set_level("DEBUG")


@recorder.command()
def address():
    """Print the local non-loopback address (127.0.0.1 if none)."""
    run_address()


@recorder.command()
def hostname():
    """Print the local host name ("localhost" if none)."""
    run_hostname()


@recorder.command()
@click.option(
    "--bind",
    "bind_address",
    default=None,
    help="Address to bind (default: the resolved local address)",
)
@click.option(
    "--preferred",
    "preferred_port",
    type=click.IntRange(0, 65535),
    default=0,
    show_default=True,
    help="Port to try first; 0 lets the OS choose",
)
def port(bind_address, preferred_port):
    """Print a listening port that is free right now."""
    run_port(bind_address, preferred_port)


@recorder.command()
@click.argument("host")
def lookup(host):
    """Print every address HOST resolves to."""
    run_lookup(host)


@recorder.command("validate-ip")
@click.argument("text")
def validate_ip(text):
    """Check that TEXT is a dotted-decimal IPv4 address."""
    run_validate_ip(text)


@recorder.command()
@click.argument("url")
@click.argument("destination", type=click.Path(dir_okay=False, writable=True))
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Connect/read timeout in seconds (default: wait for the server)",
)
def download(url, destination, timeout):
    """Download URL into DESTINATION."""
    run_download(url, destination, timeout)


@recorder.command()
@click.option(
    "--dir",
    "directory",
    type=click.Path(file_okay=False),
    default=None,
    help="Home directory (default: $RECORDER_HOME or ~/.ngrinder_recorder)",
)
@click.option(
    "--properties",
    "properties_file",
    default=None,
    help="Properties file inside the home to print",
)
def home(directory, properties_file):
    """Validate the recorder home directory and show its layout."""
    from recorder.commands.home_cmd import run_home

    run_home(directory, properties_file)


@recorder.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display recorder version information."""
    from recorder.commands.version_cmd import run_version

    run_version(verbose=verbose)


if __name__ == "__main__":
    recorder()
