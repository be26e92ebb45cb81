"""Merge command for Gitlet."""

import click
from gitlet.core.repository import Repository
from gitlet.cli.output import info, warning
from gitlet.operations.merge import CONFLICT_MESSAGE


@click.command('merge')
@click.argument('branch')
def merge_cmd(branch):
    """
    Merge a branch into the current branch.

    BRANCH is the name of the branch to merge into the current branch.
    When the current commit is the split point, BRANCH is simply checked
    out. Otherwise a merge commit is recorded; files changed differently
    on both sides are written with conflict markers.

    Examples:
        gitlet merge feature
    """
    repo = Repository.open()
    result = repo.merge.merge(branch)

    if result.is_fast_forward:
        click.echo(info(result.message))
    elif result.has_conflicts:
        click.echo(warning(CONFLICT_MESSAGE))
