"""Merge operations for Gitlet."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from gitlet.core.errors import (
    PreconditionError, StateConflictError,
    BRANCH_MISSING, GIVEN_IS_ANCESTOR, MERGE_WITH_SELF, UNCOMMITTED_CHANGES,
)
from gitlet.core.objects import Blob, Commit

logger = logging.getLogger(__name__)

FAST_FORWARD_MESSAGE = "Current branch fast-forwarded."
CONFLICT_MESSAGE = "Encountered a merge conflict."


@dataclass
class MergeConflict:
    """Represents a merge conflict in a file."""
    path: str
    base_content: Optional[bytes]
    ours_content: Optional[bytes]
    theirs_content: Optional[bytes]

    def blob(self) -> Blob:
        """The conflict-marked file recorded in the merge commit."""
        return Blob(self.path, conflict_content(self.ours_content, self.theirs_content))

    def __repr__(self) -> str:
        """String representation."""
        return f"MergeConflict({self.path})"


@dataclass
class MergeResult:
    """Result of a merge operation."""
    commit_hash: Optional[str] = None
    conflicts: List[MergeConflict] = field(default_factory=list)
    staged_additions: List[str] = field(default_factory=list)
    staged_removals: List[str] = field(default_factory=list)
    is_fast_forward: bool = False
    message: str = ""

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def __repr__(self) -> str:
        """String representation."""
        if self.is_fast_forward:
            return "MergeResult(fast-forward, conflicts=0)"
        return f"MergeResult({self.commit_hash[:7]}, conflicts={len(self.conflicts)})"


def conflict_content(ours: Optional[bytes], theirs: Optional[bytes]) -> bytes:
    """
    Build the content written for a conflicted file.

    A side that deleted the file contributes nothing. No newlines are
    added around either side.
    """
    return (b"<<<<<<< HEAD\n" + (ours or b"") + b"=======\n"
            + (theirs or b"") + b">>>>>>>\n")


class MergeEngine:
    """
    Handles merge operations for Gitlet.

    Supports:
    - Fast-forward merges
    - Three-way merges against the split point
    - Conflict detection, including modify/delete conflicts

    Only whole-file merging is done; a file changed differently on both
    sides is always a conflict.
    """

    def __init__(self, repo):
        """
        Initialize merge engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def check_preconditions(self, branch: str) -> str:
        """
        Validate a merge of ``branch`` into the active branch.

        Returns:
            str: Commit hash of the given branch

        Raises:
            StateConflictError: Staged changes, self-merge, or ancestor merge
            PreconditionError: If the branch does not exist
        """
        refs = self.repo.refs

        if not self.repo.staging.is_empty():
            raise StateConflictError(UNCOMMITTED_CHANGES)

        if not refs.branch_exists(branch):
            raise PreconditionError(BRANCH_MISSING)

        head_hash = self.repo.head_commit_hash()
        given_hash = refs.read_branch(branch)
        if branch == refs.get_current_branch() or given_hash == head_hash:
            raise StateConflictError(MERGE_WITH_SELF)

        if self.repo.graph.is_ancestor(given_hash, head_hash):
            raise StateConflictError(GIVEN_IS_ANCESTOR)

        return given_hash

    def merge(self, branch: str) -> MergeResult:
        """
        Merge a branch into the active branch.

        If the active branch's commit is the split point the given branch
        is simply checked out. Otherwise a merge commit with two parents
        is recorded, conflicts included.

        Args:
            branch: Name of the branch to merge in

        Returns:
            MergeResult describing what happened
        """
        given_hash = self.check_preconditions(branch)
        head_hash = self.repo.head_commit_hash()
        split_hash = self.repo.graph.split_point(head_hash, given_hash)

        if split_hash == head_hash:
            return self.fast_forward(branch, given_hash)

        return self.three_way_merge(branch, split_hash, given_hash)

    def fast_forward(self, branch: str, given_hash: str) -> MergeResult:
        """
        Fast-forward by checking out the given branch.

        Args:
            branch: Given branch name
            given_hash: Its commit hash

        Returns:
            MergeResult indicating fast-forward
        """
        self.repo.worktree.checkout_branch(branch)
        logger.info("fast-forwarded to %s (%s)", branch, given_hash[:7])

        return MergeResult(
            commit_hash=given_hash,
            is_fast_forward=True,
            message=FAST_FORWARD_MESSAGE,
        )

    def merge_files(
        self,
        split: Commit,
        current: Commit,
        given: Commit,
        result: MergeResult
    ) -> Dict[str, str]:
        """
        Classify every file name and build the merged file table.

        Staged names and conflicts are recorded on ``result``. Nothing is
        written; conflict blobs are stored once the merge is committed.

        Returns:
            Dict[str, str]: Merged name -> blob hash table
        """
        merged = {}
        names = set(split.files) | set(current.files) | set(given.files)

        for name in sorted(names):
            base = split.blob_hash(name)
            ours = current.blob_hash(name)
            theirs = given.blob_hash(name)

            if ours == theirs:
                # Unchanged, or changed the same way on both sides
                if ours is not None:
                    merged[name] = ours
            elif base == ours:
                if theirs is None:
                    result.staged_removals.append(name)
                else:
                    merged[name] = theirs
                    result.staged_additions.append(name)
            elif base == theirs:
                if ours is not None:
                    merged[name] = ours
            else:
                conflict = MergeConflict(
                    path=name,
                    base_content=self._blob_data(base),
                    ours_content=self._blob_data(ours),
                    theirs_content=self._blob_data(theirs),
                )
                merged[name] = conflict.blob().hash
                result.conflicts.append(conflict)
                result.staged_additions.append(name)

            logger.debug("merge %s: base=%s ours=%s theirs=%s", name,
                         _short(base), _short(ours), _short(theirs))

        return merged

    def three_way_merge(self, branch: str, split_hash: str, given_hash: str) -> MergeResult:
        """
        Record a merge commit combining the active branch and ``branch``.

        Args:
            branch: Given branch name
            split_hash: Split point commit hash
            given_hash: Given branch commit hash

        Returns:
            MergeResult with the new merge commit hash

        Raises:
            UntrackedFileError: If the result would overwrite an untracked file
        """
        objects = self.repo.objects
        head_hash = self.repo.head_commit_hash()
        current = objects.get_commit(head_hash)
        given = objects.get_commit(given_hash)
        split = objects.get_commit(split_hash)

        result = MergeResult()
        merged = self.merge_files(split, current, given, result)

        self.repo.worktree.check_untracked(merged)
        for conflict in result.conflicts:
            self.repo.write_object(conflict.blob())

        current_branch = self.repo.refs.get_current_branch()
        commit = Commit.create(
            f"Merged {branch} into {current_branch}.",
            head_hash,
            merged,
            second_parent=given_hash,
        )
        commit_hash = self.repo.write_object(commit)
        self.repo.refs.update_branch(current_branch, commit_hash)
        self.repo.worktree.sync(current, commit)

        result.commit_hash = commit_hash
        result.message = CONFLICT_MESSAGE if result.conflicts else ""
        logger.info("merged %s into %s as %s (%d conflicts)", branch,
                    current_branch, commit_hash[:7], len(result.conflicts))
        return result

    def _blob_data(self, blob_hash: Optional[str]) -> Optional[bytes]:
        if blob_hash is None:
            return None
        return self.repo.objects.get_blob(blob_hash).data


def _short(blob_hash: Optional[str]) -> str:
    return blob_hash[:7] if blob_hash else '-'
