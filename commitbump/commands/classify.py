"""
Classify command for commitbump.

Shows which release type a commit message would produce.
"""

import click
import json
import sys

from ..cli_utils import report_command_errors
from ..config import load_config
from ..domain.classifier import match_rule, normalize_patch_types


@click.command('classify')
@click.argument('message', required=False)
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
@report_command_errors
def classify_handler(message, output_json):
    """
    Classify a commit message (reads stdin if MESSAGE is omitted).

    \b
    Examples:
        commitbump classify 'feat: add export'
        git log -1 --format=%B | commitbump classify
    """
    if message is None:
        message = sys.stdin.read().rstrip('\n')

    config = load_config()
    patch_types = normalize_patch_types(config.get('release', {}).get('patch_types'))
    release_type, rule = match_rule(message, patch_types)

    if output_json:
        click.echo(json.dumps({"release_type": release_type.label, "rule": rule}))
    else:
        click.echo(f"{release_type.label} ({rule})")
