"""Branch commands - create and delete branches."""

import click
from gitlet.core.repository import Repository


@click.command('branch')
@click.argument('branch_name')
def branch_cmd(branch_name):
    """
    Create a new branch at the current commit.

    The new branch does not become the active one.

    Examples:
        gitlet branch feature
    """
    repo = Repository.open()
    repo.refs.create_branch(branch_name)


@click.command('rm-branch')
@click.argument('branch_name')
def rm_branch_cmd(branch_name):
    """
    Delete a branch pointer.

    Commits made on the branch are kept. The active branch cannot be
    removed.
    """
    repo = Repository.open()
    repo.refs.delete_branch(branch_name)
