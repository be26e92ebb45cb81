"""Repository management for Gitlet."""

import logging
import os
from pathlib import Path
from typing import Optional
from .errors import PreconditionError, ALREADY_INITIALIZED, NOT_INITIALIZED, FILE_MISSING
from .errors import INVALID_BRANCH_NAME
from .objects import GitletObject, Commit
from .refs import is_valid_branch_name
from .store import ObjectStore
from gitlet.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)

GITLET_DIR = '.gitlet'


class Repository:
    """
    Represents a Gitlet repository.

    The repository is the context every operation runs against: it owns
    the .gitlet directory layout and lazily exposes the object store,
    branch manager, staging area, commit graph, working tree and merge
    engine.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.gitlet_dir = self.work_tree / GITLET_DIR
        self.blobs_dir = self.gitlet_dir / 'blobs'
        self.commits_dir = self.gitlet_dir / 'commits'
        self.branches_dir = self.gitlet_dir / 'branches'
        self.staging_dir = self.gitlet_dir / 'staging'
        self.staged_add_file = self.staging_dir / 'add'
        self.staged_rm_file = self.staging_dir / 'rm'
        self.head_file = self.gitlet_dir / 'HEAD'
        self.config_file = self.gitlet_dir / 'config'

        # Initialize managers (lazy loading to avoid circular import)
        self._object_store = None
        self._ref_manager = None
        self._staging = None
        self._graph = None
        self._working_tree = None
        self._merge_engine = None
        self._config = None

    @property
    def objects(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._object_store is None:
            self._object_store = ObjectStore(self.blobs_dir, self.commits_dir)
        return self._object_store

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def staging(self):
        """Get the StagingArea, read from disk on first access."""
        if self._staging is None:
            from .index import StagingArea
            self._staging = StagingArea.read(self)
        return self._staging

    @property
    def graph(self):
        """Get CommitGraph instance."""
        if self._graph is None:
            from gitlet.operations.graph import CommitGraph
            self._graph = CommitGraph(self.objects)
        return self._graph

    @property
    def worktree(self):
        """Get WorkingTree instance."""
        if self._working_tree is None:
            from gitlet.operations.checkout import WorkingTree
            self._working_tree = WorkingTree(self)
        return self._working_tree

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from gitlet.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    @property
    def config(self):
        """Get Config instance for this repository."""
        if self._config is None:
            from .config import get_config
            self._config = get_config(self)
        return self._config

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .gitlet directory structure:
        .gitlet/
        ├── blobs/         # File snapshots
        ├── commits/       # Commits, one file per hash
        ├── branches/      # Branch pointers
        ├── staging/       # Pending additions and removals
        ├── HEAD           # Active branch
        └── config         # Repository configuration

        The root commit is written and the default branch points at it.

        Returns:
            Repository: self for method chaining

        Raises:
            PreconditionError: If repository already exists, or the
                configured default branch name is invalid
        """
        if self.gitlet_dir.exists():
            raise PreconditionError(ALREADY_INITIALIZED)

        branch = self.config.default_branch()
        if not is_valid_branch_name(branch):
            raise PreconditionError(INVALID_BRANCH_NAME)

        self.gitlet_dir.mkdir()
        self.blobs_dir.mkdir()
        self.commits_dir.mkdir()
        self.branches_dir.mkdir()
        self.staging_dir.mkdir()

        atomic_write_text(self.config_file, '[core]\nrepositoryformatversion = 0\n\n')
        self._config = None

        root_hash = self.write_object(Commit.initial())
        self.refs.update_branch(branch, root_hash)
        self.refs.set_head(branch)
        self.staging.write(self)

        logger.info("initialized repository at %s on branch %s", self.gitlet_dir, branch)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .gitlet
        directory or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / GITLET_DIR).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def open(cls, path: str = '.') -> 'Repository':
        """
        Find the enclosing repository or fail.

        Raises:
            PreconditionError: If no repository encloses ``path``
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise PreconditionError(NOT_INITIALIZED)
        return repo

    def write_object(self, obj: GitletObject) -> str:
        """Write object to the store and return its hash."""
        return self.objects.put(obj)

    def read_object(self, hash: str) -> GitletObject:
        """Read object from the store by full hash."""
        return self.objects.get(hash)

    def object_exists(self, hash: str) -> bool:
        return self.objects.exists(hash)

    def head_commit_hash(self) -> str:
        """Hash of the commit the active branch points to."""
        return self.refs.resolve_head()

    def head_commit(self) -> Commit:
        """The commit the active branch points to."""
        return self.objects.get_commit(self.head_commit_hash())

    def relative_name(self, path: str, cwd: Optional[str] = None) -> str:
        """
        Turn a user-supplied path into a repository-relative file name.

        Args:
            path: Path as typed, relative to ``cwd`` or absolute
            cwd: Directory to resolve against (defaults to os.getcwd())

        Returns:
            str: '/'-separated name relative to the work tree

        Raises:
            PreconditionError: If the path lies outside the work tree or
                inside .gitlet
        """
        base = Path(cwd) if cwd is not None else Path(os.getcwd())
        full = (base / path).resolve()
        try:
            rel = full.relative_to(self.work_tree)
        except ValueError:
            raise PreconditionError(FILE_MISSING)
        if rel.parts and rel.parts[0] == GITLET_DIR:
            raise PreconditionError(FILE_MISSING)
        return rel.as_posix()

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
