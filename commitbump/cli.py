#!/usr/bin/env python3

import click

from commitbump.commands.analyze import analyze_handler
from commitbump.commands.classify import classify_handler
from commitbump.commands.config import config_cmd


@click.group()
@click.version_option(package_name='commitbump')
def cli():
    """commitbump - Next semantic version from conventional commits.

    Reads the commits made since the last release tag, classifies each one
    (feat -> minor, fix/perf/refactor/revert -> patch, breaking -> major)
    and prints the next version.
    """
    pass


cli.add_command(analyze_handler, name='analyze')
cli.add_command(classify_handler, name='classify')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
