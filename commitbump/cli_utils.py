"""
Common CLI utilities for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps

from .exit_codes import CommandError


def report_command_errors(func):
    """
    Decorator that turns a CommandError into its exit code.

    With --json the error is printed to stdout as a JSON object
    (error, type, exit_code); otherwise a red message goes to stderr.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except CommandError as e:
            if kwargs.get('output_json'):
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__,
                    "exit_code": e.exit_code
                }
                click.echo(json.dumps(error_obj, ensure_ascii=False))
            else:
                click.secho(f"Error: {e}", fg="red", err=True)
            sys.exit(e.exit_code)

    return wrapper
