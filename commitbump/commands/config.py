"""
Config commands for commitbump.

Writes a default configuration file and shows the merged configuration.
"""

import click
import json
import os

import yaml

from ..cli_utils import report_command_errors
from ..config import get_config_path, get_default_config, load_config, save_config


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("generate")
@click.option("--output", "-o", type=click.Path(dir_okay=False),
              help="Where to write the file (default: ~/.commitbump/config.json)")
def generate_config(output):
    """Write a configuration file with the default settings."""
    config = get_default_config()
    config_path = output or os.path.expanduser("~/.commitbump/config.json")
    if os.path.exists(config_path):
        click.echo(f"Configuration already exists at {config_path}. Default configuration:\n{json.dumps(config, indent=2)}")
        return
    written = save_config(config, config_path)
    click.echo(f"Configuration written to {written}:\n{json.dumps(config, indent=2)}")


@config_cmd.command("show")
@click.argument("path", default=".", type=click.Path(file_okay=False))
@click.option("--yaml", "as_yaml", is_flag=True, help="Print YAML instead of JSON")
@click.option("--source", is_flag=True, help="Print only the config file that applies to PATH")
@report_command_errors
def show_config(path, as_yaml, source):
    """
    Show the effective configuration for a project directory.

    Defaults, the config file and COMMITBUMP_* environment variables are
    merged in that order.
    """
    if source:
        click.echo(str(get_config_path(path)))
        return

    config = load_config(path)
    if as_yaml:
        click.echo(yaml.safe_dump(config, default_flow_style=False, sort_keys=False), nl=False)
    else:
        click.echo(json.dumps(config, indent=2, ensure_ascii=False))
