"""Commit graph traversal for Gitlet."""

import logging
from collections import deque
from typing import Dict, List, Optional, Tuple
from gitlet.core.objects import Commit

logger = logging.getLogger(__name__)


class CommitGraph:
    """
    Read-only queries over the commit DAG.

    Edges run from a commit to its first parent and, for merge commits,
    its second parent. Every traversal is breadth-first with a visited
    set, so shared history is expanded once.
    """

    def __init__(self, store):
        """
        Initialize commit graph.

        Args:
            store: ObjectStore holding the commits
        """
        self.store = store

    def _distances(self, start: str) -> Dict[str, int]:
        """
        BFS distances from ``start`` to each of its ancestors.

        The dict preserves traversal order, start commit first.
        """
        distances = {start: 0}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            commit = self.store.get_commit(current)
            for parent in commit.parents:
                if parent not in distances:
                    distances[parent] = distances[current] + 1
                    queue.append(parent)

        return distances

    def ancestors(self, commit_hash: str) -> List[str]:
        """
        Get every ancestor of a commit, the commit itself included.

        Args:
            commit_hash: Starting commit hash

        Returns:
            Commit hashes in breadth-first order
        """
        return list(self._distances(commit_hash))

    def first_parent_history(self, commit_hash: str) -> List[Tuple[str, Commit]]:
        """
        Walk first-parent links back to the root commit.

        Args:
            commit_hash: Commit to start from

        Returns:
            List of (hash, commit) pairs, newest first
        """
        history = []
        current = commit_hash

        while current is not None:
            commit = self.store.get_commit(current)
            history.append((current, commit))
            current = commit.parent

        return history

    def is_ancestor(self, candidate: str, descendant: str) -> bool:
        """
        Check if ``candidate`` is reachable from ``descendant``.

        A commit counts as its own ancestor.
        """
        return candidate in self._distances(descendant)

    def first_common_ancestor(self, a: str, b: str) -> Optional[str]:
        """
        First commit in ``a``'s breadth-first ancestry that ``b`` also reaches.

        Args:
            a: First commit hash
            b: Second commit hash

        Returns:
            Commit hash, or None if the histories are disjoint
        """
        b_ancestors = self._distances(b)
        for commit_hash in self._distances(a):
            if commit_hash in b_ancestors:
                return commit_hash
        return None

    def split_point(self, a: str, b: str) -> Optional[str]:
        """
        Find the merge base of two commits.

        Common ancestors that are themselves ancestors of another common
        ancestor are discarded; of the remaining candidates the one
        nearest ``a`` wins, then the one nearest ``b``, then the first in
        ``a``'s traversal order.

        On a linear history, or wherever a single best common ancestor
        exists, this is the same commit :meth:`first_common_ancestor`
        returns.

        Args:
            a: Current commit hash
            b: Given commit hash

        Returns:
            Commit hash, or None if the histories are disjoint
        """
        if a == b:
            return a

        dist_a = self._distances(a)
        dist_b = self._distances(b)
        order = {h: i for i, h in enumerate(dist_a)}

        common = [h for h in dist_a if h in dist_b]
        if not common:
            return None

        # Proper ancestors of any common ancestor are never the best base
        dominated = set()
        for candidate in common:
            if candidate in dominated:
                continue
            for ancestor in self._distances(candidate):
                if ancestor != candidate:
                    dominated.add(ancestor)

        candidates = [h for h in common if h not in dominated]
        best = min(candidates, key=lambda h: (dist_a[h], dist_b[h], order[h]))
        logger.debug(
            "split point of %s and %s is %s (%d candidates)",
            a[:7], b[:7], best[:7], len(candidates)
        )
        return best
