"""Log commands - show commit history."""

import click
from gitlet.core.errors import PreconditionError, NO_MATCHING_MESSAGE
from gitlet.core.objects import Commit
from gitlet.core.repository import Repository
from gitlet.operations.commit import all_commits, find_commits


def format_log_entry(commit_hash: str, commit: Commit) -> str:
    """Render one commit the way log and global-log print it."""
    lines = ['===', f'commit {commit_hash}']
    if commit.is_merge:
        lines.append(f'Merge: {commit.parent[:7]} {commit.second_parent[:7]}')
    lines.append(f'Date: {commit.timestamp}')
    lines.append(commit.message)
    lines.append('')
    return '\n'.join(lines)


@click.command('log')
def log_cmd():
    """
    Show the current branch's history.

    Follows first parents from the current commit back to the initial
    commit, newest first.

    Examples:
        gitlet log
    """
    repo = Repository.open()
    for commit_hash, commit in repo.graph.first_parent_history(repo.head_commit_hash()):
        click.echo(format_log_entry(commit_hash, commit))


@click.command('global-log')
def global_log_cmd():
    """Show every commit ever made, in no particular order."""
    repo = Repository.open()
    for commit_hash, commit in all_commits(repo):
        click.echo(format_log_entry(commit_hash, commit))


@click.command('find')
@click.argument('message')
def find_cmd(message):
    """
    Print the ids of all commits with exactly MESSAGE.

    Examples:
        gitlet find "initial commit"
    """
    repo = Repository.open()
    matches = find_commits(repo, message)
    if not matches:
        raise PreconditionError(NO_MATCHING_MESSAGE)
    for commit_hash in matches:
        click.echo(commit_hash)
