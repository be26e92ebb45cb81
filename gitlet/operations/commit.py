"""Commit creation and history queries."""

import logging
from typing import Dict, List, Optional, Tuple
from gitlet.core.errors import CommandUsageError, StateConflictError
from gitlet.core.errors import EMPTY_MESSAGE, NOTHING_TO_COMMIT
from gitlet.core.objects import Commit

logger = logging.getLogger(__name__)


def staged_file_table(repo) -> Dict[str, str]:
    """
    Build the file table the next commit would record.

    Starts from the head commit's table, replaces every name staged for
    addition and drops every name staged for removal.
    """
    staging = repo.staging
    files = dict(repo.head_commit().files)

    for name, blob in staging.additions.items():
        files[name] = blob.hash
    for name in staging.removals:
        files.pop(name, None)

    return files


def commit_staged(repo, message: str, second_parent: Optional[str] = None) -> str:
    """
    Record the staged changes as a new commit on the active branch.

    Args:
        repo: Repository instance
        message: Commit message
        second_parent: Merged-in commit hash, for merge commits

    Returns:
        str: Hash of the new commit

    Raises:
        CommandUsageError: If the message is blank
        StateConflictError: If nothing is staged
    """
    if not message or not message.strip():
        raise CommandUsageError(EMPTY_MESSAGE)

    staging = repo.staging
    if staging.is_empty():
        raise StateConflictError(NOTHING_TO_COMMIT)

    parent = repo.head_commit_hash()
    files = staged_file_table(repo)

    for blob in staging.additions.values():
        repo.write_object(blob)

    commit = Commit.create(message, parent, files, second_parent=second_parent)
    commit_hash = repo.write_object(commit)

    branch = repo.refs.get_current_branch()
    repo.refs.update_branch(branch, commit_hash)

    staging.clear()
    staging.write(repo)

    logger.info("committed %s on %s (%d files)", commit_hash[:7], branch, len(files))
    return commit_hash


def all_commits(repo) -> List[Tuple[str, Commit]]:
    """Every stored commit, in commit-store listing order."""
    return [(h, repo.objects.get_commit(h)) for h in repo.objects.all_commit_hashes()]


def find_commits(repo, message: str) -> List[str]:
    """
    Get the ids of all commits whose message is exactly ``message``.

    Args:
        repo: Repository instance
        message: Message to match

    Returns:
        Matching commit hashes, in commit-store listing order
    """
    return [h for h, commit in all_commits(repo) if commit.message == message]
