"""Branch and HEAD management for Gitlet."""

import logging
from typing import Optional, List, Tuple
from .errors import PreconditionError, StateConflictError
from .errors import BRANCH_EXISTS, BRANCH_MISSING, INVALID_BRANCH_NAME, REMOVE_CURRENT_BRANCH
from gitlet.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)

HEAD_PREFIX = 'ref: branches/'


def is_valid_branch_name(name: str) -> bool:
    """A branch name must map to a single visible file in .gitlet/branches."""
    return bool(name) and not name.startswith('.') and not any(
        sep in name for sep in ('/', '\\', '\0', '\n')
    )


class RefManager:
    """
    Manages branches and HEAD.

    Each branch is a file under .gitlet/branches holding a full commit
    hash. HEAD is always symbolic and names the active branch:
    ``ref: branches/<name>``.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.branches_dir = repo.branches_dir
        self.head_file = repo.head_file

    def branch_path(self, name: str):
        """
        File holding a branch pointer.

        Raises:
            PreconditionError: If the name could escape .gitlet/branches
        """
        if not is_valid_branch_name(name):
            raise PreconditionError(INVALID_BRANCH_NAME)
        return self.branches_dir / name

    def branch_exists(self, name: str) -> bool:
        return is_valid_branch_name(name) and self.branch_path(name).is_file()

    def read_branch(self, name: str) -> Optional[str]:
        """
        Read the commit hash a branch points to.

        Args:
            name: Branch name

        Returns:
            Commit hash or None if the branch doesn't exist
        """
        if not self.branch_exists(name):
            return None
        return self.branch_path(name).read_text().strip()

    def update_branch(self, name: str, commit_hash: str) -> None:
        """
        Point a branch at a commit, creating the branch file if needed.

        Args:
            name: Branch name
            commit_hash: Full commit hash
        """
        atomic_write_text(self.branch_path(name), commit_hash + '\n')
        logger.debug("branch %s -> %s", name, commit_hash[:7])

    def create_branch(self, name: str) -> str:
        """
        Create a new branch at the head commit.

        Args:
            name: Branch name

        Returns:
            str: Commit hash the branch points to

        Raises:
            StateConflictError: If the branch already exists
        """
        if self.branch_exists(name):
            raise StateConflictError(BRANCH_EXISTS)

        commit_hash = self.resolve_head()
        self.update_branch(name, commit_hash)
        return commit_hash

    def delete_branch(self, name: str) -> None:
        """
        Delete a branch pointer. Commits are left untouched.

        Args:
            name: Branch name

        Raises:
            PreconditionError: If the branch does not exist
            StateConflictError: If it is the active branch
        """
        if not self.branch_exists(name):
            raise PreconditionError(BRANCH_MISSING)
        if name == self.get_current_branch():
            raise StateConflictError(REMOVE_CURRENT_BRANCH)

        self.branch_path(name).unlink()
        logger.debug("deleted branch %s", name)

    def get_current_branch(self) -> Optional[str]:
        """
        Get the active branch name.

        Returns:
            Branch name or None if HEAD is missing
        """
        if not self.head_file.exists():
            return None

        content = self.head_file.read_text().strip()
        if content.startswith(HEAD_PREFIX):
            return content[len(HEAD_PREFIX):]
        return None

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD, through the active branch, to a commit hash.

        Returns:
            Commit hash or None if HEAD doesn't resolve
        """
        branch = self.get_current_branch()
        if branch is None:
            return None
        return self.read_branch(branch)

    def set_head(self, name: str) -> None:
        """
        Make a branch the active one.

        Args:
            name: Branch name
        """
        atomic_write_text(self.head_file, f'{HEAD_PREFIX}{name}\n')
        logger.debug("HEAD -> %s", name)

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples, sorted by name
        """
        if not self.branches_dir.exists():
            return []

        branches = []
        for branch_file in self.branches_dir.iterdir():
            if branch_file.is_file() and not branch_file.name.startswith('.'):
                branches.append((branch_file.name, branch_file.read_text().strip()))

        return sorted(branches, key=lambda x: x[0])

    def __repr__(self) -> str:
        return f"RefManager(head={self.get_current_branch()})"
