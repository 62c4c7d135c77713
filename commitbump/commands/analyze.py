"""
Analyze command for commitbump.

Computes the release type and next version for a repository.
"""

import click
import json
from typing import Optional

from ..cli_utils import report_command_errors
from ..config import load_config, configure_logging
from ..render import render_analysis
from ..services import AnalysisService


@click.command('analyze')
@click.argument('path', default='.', type=click.Path(file_okay=False))
@click.option('--tag-format', '-f', help='Tag format containing {version} (default from config: v{version})')
@click.option('--json', 'output_json', is_flag=True,
              help='Output as a single JSON object (default: pretty table)')
@click.option('--version-only', is_flag=True, help='Print only the next version')
@click.option('--verbose', '-v', is_flag=True, help='Log every decision to stderr')
@report_command_errors
def analyze_handler(
    path: str,
    tag_format: Optional[str],
    output_json: bool,
    version_only: bool,
    verbose: bool,
):
    """
    Work out the next version from commits since the last release tag.

    \b
    Examples:
        # Current directory, tags like v1.2.3
        commitbump analyze
        # Custom tag format
        commitbump analyze ~/src/project --tag-format 'release-{version}'
        # Machine-readable output
        commitbump analyze --json | jq .next_version
        # Just the version
        commitbump analyze --version-only
    """
    config = load_config(path)
    configure_logging(config, verbose=verbose)

    result = AnalysisService(config=config).analyze(path, tag_format)

    if version_only:
        click.echo(result.next_version)
    elif output_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        render_analysis(result)
