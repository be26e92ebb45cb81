"""Working-tree synchronisation: checkout and reset."""

import logging
from typing import Iterable, List, Optional
from gitlet.core.errors import (
    ObjectNotFoundError, PreconditionError, StateConflictError, UntrackedFileError,
    CHECKOUT_CURRENT_BRANCH, FILE_NOT_IN_COMMIT, NO_SUCH_BRANCH,
)
from gitlet.core.objects import Commit

logger = logging.getLogger(__name__)


class WorkingTree:
    """
    Moves the working directory between commits.

    Every whole-tree operation runs the untracked-file guard before it
    touches a single file, then replaces the files tracked by the old
    commit with those of the new one and clears the staging area.
    """

    def __init__(self, repo):
        """
        Initialize working tree.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.root = repo.work_tree

    def working_files(self) -> List[str]:
        """
        List regular files in the work tree.

        Any path with a component starting with '.' is skipped, which
        also keeps .gitlet out.

        Returns:
            Sorted repository-relative names
        """
        names = []
        for path in self.root.rglob('*'):
            rel = path.relative_to(self.root)
            if any(part.startswith('.') for part in rel.parts):
                continue
            if path.is_file():
                names.append(rel.as_posix())
        return sorted(names)

    def untracked_files(self) -> List[str]:
        """Working files the head commit does not track."""
        head = self.repo.head_commit()
        return [name for name in self.working_files() if not head.tracks(name)]

    def check_untracked(self, names: Iterable[str]) -> None:
        """
        Make sure none of ``names`` is an untracked working file.

        Raises:
            UntrackedFileError: If any of them is
        """
        untracked = set(self.untracked_files())
        in_the_way = [name for name in names if name in untracked]
        if in_the_way:
            raise UntrackedFileError(in_the_way)

    def read_file(self, name: str) -> Optional[bytes]:
        path = self.root / name
        if not path.is_file():
            return None
        return path.read_bytes()

    def write_file(self, name: str, data: bytes) -> None:
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def delete_file(self, name: str) -> None:
        path = self.root / name
        if path.is_file():
            path.unlink()

    def sync(self, from_commit: Commit, to_commit: Commit) -> None:
        """
        Replace ``from_commit``'s files with ``to_commit``'s.

        Untracked files are left alone; callers run the guard first.
        The staging area is cleared.
        """
        for name in from_commit.files:
            self.delete_file(name)

        for name, blob_hash in to_commit.files.items():
            self.write_file(name, self.repo.objects.get_blob(blob_hash).data)

        staging = self.repo.staging
        staging.clear()
        staging.write(self.repo)

        logger.debug("synced work tree %s -> %s", from_commit.hash[:7], to_commit.hash[:7])

    def checkout_file(self, name: str, commit_id: Optional[str] = None) -> None:
        """
        Restore one file from a commit, head by default.

        The working copy is overwritten and nothing is staged.

        Args:
            name: Repository-relative file name
            commit_id: Full or abbreviated commit id

        Raises:
            ObjectNotFoundError: If no commit matches ``commit_id``
            PreconditionError: If the commit does not track the file
        """
        if commit_id is None:
            commit = self.repo.head_commit()
        else:
            commit = self.repo.objects.get_commit(commit_id)

        if not commit.tracks(name):
            raise PreconditionError(FILE_NOT_IN_COMMIT)

        self.write_file(name, self.repo.objects.get_blob(commit.blob_hash(name)).data)
        logger.debug("checked out %s from %s", name, commit.hash[:7])

    def checkout_branch(self, branch: str) -> None:
        """
        Switch to another branch.

        Raises:
            PreconditionError: If the branch does not exist
            StateConflictError: If it is already the active branch
            UntrackedFileError: If the switch would overwrite an untracked file
        """
        refs = self.repo.refs
        if not refs.branch_exists(branch):
            raise PreconditionError(NO_SUCH_BRANCH)
        if branch == refs.get_current_branch():
            raise StateConflictError(CHECKOUT_CURRENT_BRANCH)

        target = self.repo.objects.get_commit(refs.read_branch(branch))
        self.check_untracked(target.files)

        self.sync(self.repo.head_commit(), target)
        refs.set_head(branch)
        logger.info("switched to branch %s", branch)

    def reset(self, commit_id: str) -> str:
        """
        Move the active branch to a commit and check out its files.

        Args:
            commit_id: Full or abbreviated commit id

        Returns:
            str: Full hash of the commit

        Raises:
            ObjectNotFoundError: If no commit matches
            UntrackedFileError: If an untracked file would be overwritten
        """
        full_hash = self.repo.objects.resolve_commit_id(commit_id)
        if full_hash is None:
            raise ObjectNotFoundError(commit_id)

        target = self.repo.objects.get_commit(full_hash)
        self.check_untracked(target.files)

        self.sync(self.repo.head_commit(), target)
        branch = self.repo.refs.get_current_branch()
        self.repo.refs.update_branch(branch, full_hash)
        logger.info("reset %s to %s", branch, full_hash[:7])
        return full_hash

    def __repr__(self) -> str:
        return f"WorkingTree(root={self.root})"
