"""Main CLI entry point with command groups"""

import click

from dirstat.__version__ import __version__
from dirstat.cli.scan import scan_command


class DefaultCommandGroup(click.Group):
    """Custom Click Group that allows a default command"""

    def parse_args(self, ctx, args):
        # During shell completion, don't redirect to default command
        if ctx.resilient_parsing:
            return super().parse_args(ctx, args)

        # No arguments: show group help
        if not args:
            return super().parse_args(ctx, args)

        # If --help or --version is requested, show group help/version
        if args[0] in ('--help', '-h', '--version'):
            return super().parse_args(ctx, args)

        if args[0] in self.commands:
            return super().parse_args(ctx, args)

        # Otherwise, treat as scan command (default)
        return super().parse_args(ctx, ['scan'] + args)


@click.group(cls=DefaultCommandGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name='dirstat')
@click.pass_context
def cli(ctx):
    """
    dirstat - Concurrent directory size and extension statistics.

    \b
    Commands:
      dirstat <path>            Scan a directory (default command)
      dirstat scan <path>       Same, explicit form

    \b
    Examples:
      dirstat /var/log
      dirstat ~/Downloads --top 20 --workers 8
      dirstat /data --json -o report.json
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


cli.add_command(scan_command, name='scan')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
