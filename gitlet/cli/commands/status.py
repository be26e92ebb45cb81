"""Status command - show working tree status."""

import click
from gitlet.core.repository import Repository
from gitlet.operations.status import compute_status


@click.command('status')
def status_cmd():
    """
    Show branches, staged and removed files, unstaged modifications
    and untracked files.

    The current branch is marked with *.
    """
    repo = Repository.open()
    click.echo(compute_status(repo).format(), nl=False)
