"""Reset command - move the current branch to another commit."""

import click
from gitlet.core.repository import Repository


@click.command('reset')
@click.argument('commit_id')
def reset_cmd(commit_id):
    """
    Check out every file of COMMIT_ID and move the current branch there.

    Files tracked by the current commit but not by COMMIT_ID are deleted,
    and the staging area is cleared. Abbreviated ids are accepted.

    Examples:
        gitlet reset a1b2c3d
    """
    repo = Repository.open()
    repo.worktree.reset(commit_id)
