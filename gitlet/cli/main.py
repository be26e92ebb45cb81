"""Main CLI entry point for Gitlet."""

import logging

import click
from colorama import init

from gitlet import __version__
from gitlet.core.config import get_config
from gitlet.core.errors import (
    GitletError, CommandUsageError, INCORRECT_OPERANDS, NO_COMMAND, UNKNOWN_COMMAND,
)
from gitlet.core.repository import Repository
from gitlet.cli.output import BANNER, error
from gitlet.cli.commands import (init_cmd, add_cmd, rm_cmd, commit_cmd, log_cmd,
                                 global_log_cmd, find_cmd, status_cmd, checkout_cmd,
                                 branch_cmd, rm_branch_cmd, reset_cmd, merge_cmd,
                                 config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


class GitletGroup(click.Group):
    """
    Custom Group class for the gitlet command.

    Shows the banner before help, and turns every failure into a single
    line of output with a normal exit: Gitlet errors print their message,
    click usage errors print "Incorrect operands.".
    """

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)

    def resolve_command(self, ctx, args):
        if self.get_command(ctx, args[0]) is None:
            raise CommandUsageError(UNKNOWN_COMMAND)
        return super().resolve_command(ctx, args)

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError:
            click.echo(error(INCORRECT_OPERANDS))
        except GitletError as e:
            click.echo(error(str(e)))


def configure_logging(verbose: bool) -> None:
    """
    Point the 'gitlet' logger at stderr for this invocation.

    Level: DEBUG with --verbose, else core.loglevel from config, else
    WARNING. Any handler left by a previous invocation is replaced.
    """
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    else:
        repo = Repository.find_repository()
        name = get_config(repo).log_level()
        if name:
            configured = logging.getLevelName(name.upper())
            if isinstance(configured, int):
                level = configured

    logger = logging.getLogger('gitlet')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)


@click.group(cls=GitletGroup, invoke_without_command=True)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log debug details to stderr')
@click.pass_context
def cli(ctx, verbose):
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        raise CommandUsageError(NO_COMMAND)


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(rm_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(global_log_cmd)
cli.add_command(find_cmd)
cli.add_command(status_cmd)
cli.add_command(checkout_cmd)
cli.add_command(branch_cmd)
cli.add_command(rm_branch_cmd)
cli.add_command(reset_cmd)
cli.add_command(merge_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
