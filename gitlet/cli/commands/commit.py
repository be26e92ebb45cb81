"""Commit command - create a commit from staged changes."""

import click
from gitlet.core.repository import Repository
from gitlet.operations.commit import commit_staged


@click.command('commit')
@click.argument('message', required=False)
def commit_cmd(message):
    """
    Record the staged changes in a new commit.

    The new commit tracks everything its parent tracks, with staged
    additions replacing older versions and staged removals dropped.

    Examples:
        gitlet commit "Add greeting"
    """
    repo = Repository.open()
    commit_staged(repo, message)
