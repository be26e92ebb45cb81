"""Content-addressed object store for Gitlet."""

import logging
import zlib
from pathlib import Path
from typing import List, Optional
from .errors import ObjectNotFoundError, FILE_MISSING
from .hash import is_hash_prefix
from .objects import GitletObject, Blob, Commit
from gitlet.utils.fs import atomic_write

logger = logging.getLogger(__name__)

OBJECT_TYPES = {
    'blob': Blob,
    'commit': Commit,
}


class ObjectStore:
    """
    Write-once storage for blobs and commits.

    Objects are stored zlib-compressed in the format
    <type> <size>\0<content>, one file per object named by its full hash.
    Blobs and commits live in separate directories so that commit ids can
    be listed (and prefix-matched) without touching blobs.
    """

    def __init__(self, blobs_dir: Path, commits_dir: Path):
        """
        Initialize object store.

        Args:
            blobs_dir: Directory holding blob objects
            commits_dir: Directory holding commit objects
        """
        self.blobs_dir = Path(blobs_dir)
        self.commits_dir = Path(commits_dir)

    def object_path(self, obj_type: str, hash: str) -> Path:
        """
        Get filesystem path for an object.

        Args:
            obj_type: 'blob' or 'commit'
            hash: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        directory = self.commits_dir if obj_type == 'commit' else self.blobs_dir
        return directory / hash

    def put(self, obj: GitletObject) -> str:
        """
        Write object to the store.

        Putting an object that is already stored is a no-op.

        Args:
            obj: Object to write

        Returns:
            str: SHA-1 hash of the object
        """
        hash = obj.hash
        path = self.object_path(obj.type, hash)

        if path.exists():
            logger.debug("object %s already stored", hash[:7])
            return hash

        data = obj.serialize()
        header = f"{obj.type} {len(data)}\0".encode()
        atomic_write(path, zlib.compress(header + data))
        logger.debug("stored %s %s", obj.type, hash[:7])

        return hash

    def get(self, hash: str) -> GitletObject:
        """
        Read an object by its full hash.

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            GitletObject: Deserialized Blob or Commit

        Raises:
            ObjectNotFoundError: If no object has that hash
        """
        for obj_type in ('commit', 'blob'):
            path = self.object_path(obj_type, hash)
            if path.is_file():
                return self._read(path)
        raise ObjectNotFoundError(hash)

    def get_blob(self, hash: str) -> Blob:
        """Read a blob by its full hash."""
        path = self.object_path('blob', hash)
        if not path.is_file():
            raise ObjectNotFoundError(hash, FILE_MISSING)
        return self._read(path)

    def get_commit(self, commit_id: str) -> Commit:
        """
        Read a commit by full or abbreviated id.

        Args:
            commit_id: Full hash or a prefix of one

        Returns:
            Commit: The matching commit

        Raises:
            ObjectNotFoundError: If nothing matches
        """
        full_hash = self.resolve_commit_id(commit_id)
        if full_hash is None:
            raise ObjectNotFoundError(commit_id)
        return self._read(self.object_path('commit', full_hash))

    def resolve_commit_id(self, commit_id: str) -> Optional[str]:
        """
        Expand a possibly abbreviated commit id to a full hash.

        An exact match wins; otherwise the first stored commit (in sorted
        order) starting with the prefix is returned. Ambiguous prefixes
        are not reported.

        Args:
            commit_id: Full hash or prefix

        Returns:
            Full commit hash, or None if nothing matches
        """
        if not is_hash_prefix(commit_id):
            return None

        commit_id = commit_id.lower()
        if self.object_path('commit', commit_id).is_file():
            return commit_id

        for full_hash in self.all_commit_hashes():
            if full_hash.startswith(commit_id):
                return full_hash
        return None

    def exists(self, hash: str) -> bool:
        """
        Check if object exists in the store.

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            bool: True if object exists
        """
        return (self.object_path('commit', hash).is_file()
                or self.object_path('blob', hash).is_file())

    def all_commit_hashes(self) -> List[str]:
        """List every stored commit hash in sorted order."""
        if not self.commits_dir.exists():
            return []
        return sorted(
            p.name for p in self.commits_dir.iterdir()
            if p.is_file() and not p.name.startswith('.')
        )

    def _read(self, path: Path) -> GitletObject:
        compressed = path.read_bytes()
        content = zlib.decompress(compressed)

        # Parse header: <type> <size>\0
        null_idx = content.index(b'\0')
        header = content[:null_idx].decode()
        data = content[null_idx + 1:]

        try:
            obj_type, size_str = header.split(' ', 1)
            size = int(size_str)
        except ValueError:
            raise ValueError(f"Invalid object header: {header}")

        if len(data) != size:
            raise ValueError(f"Object size mismatch: expected {size}, got {len(data)}")

        if obj_type not in OBJECT_TYPES:
            raise ValueError(f"Unknown object type: {obj_type}")

        obj = OBJECT_TYPES[obj_type]()
        obj.deserialize(data)
        return obj

    def __repr__(self) -> str:
        return f"ObjectStore(commits={self.commits_dir})"
