"""CLI command for scanning a directory tree."""

import sys

import click

from dirstat.errors import FatalConfigError
from dirstat.orchestrator import scan_directory
from dirstat.utils import default_top, get_bool_env, setup_logging


@click.command('scan')
@click.argument('path', type=str)
@click.option('--workers', '-w', type=int, default=None, help='Worker threads (default: max(2, CPU count))')
@click.option('--top', '-n', type=int, default=None, help='Rows in the extension and file tables (default: 15)')
@click.option('--json', 'json_output', is_flag=True, help='Output in JSON format')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option(
    '--output',
    '-o',
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help='Also write the report to this file',
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default=None,
    help='Logging level (default: DIRSTAT_LOG_LEVEL or WARNING)',
)
def scan_command(
    path: str,
    workers: int | None,
    top: int | None,
    json_output: bool,
    no_color: bool,
    output: str | None,
    log_level: str | None,
):
    """Scan PATH recursively and report size statistics per extension.

    \b
    Examples:
        dirstat scan /var/log
        dirstat scan ~/projects --top 5
        dirstat scan /data --workers 16 --json
        dirstat scan /data -o report.txt
    """
    setup_logging(log_level)

    if top is None:
        top = default_top()

    try:
        snapshot = scan_directory(path, workers=workers)
    except FatalConfigError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    if json_output:
        report = snapshot.model_dump_json(indent=2)
        click.echo(report)
    else:
        colorize = not no_color and get_bool_env('DIRSTAT_COLOR', True) and sys.stdout.isatty()
        click.echo(snapshot.to_cli(colorize=colorize, top=top))
        report = snapshot.to_cli(colorize=False, top=top)

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(report)
            f.write('\n')
        if not json_output:
            click.echo(f'Report written to {output}')

    if snapshot.degraded:
        if snapshot.traversal_error:
            click.echo(f'Warning: scan stopped early: {snapshot.traversal_error}', err=True)
        if snapshot.skipped_entries:
            click.echo(f'Warning: {snapshot.skipped_entries} entries could not be read', err=True)
