"""Staging area (index) implementation."""

import hashlib
import logging
import struct
from typing import Dict
from .errors import CorruptStagingError, PreconditionError, StateConflictError
from .errors import FILE_MISSING, INVALID_FILE_NAME, NOTHING_TO_REMOVE
from .objects import Blob
from .repository import GITLET_DIR
from gitlet.utils.fs import atomic_write

logger = logging.getLogger(__name__)

SIGNATURE = b'GLST'
VERSION = 1


def encode_entries(entries: Dict[str, Blob]) -> bytes:
    """
    Encode a name -> blob mapping in the staging file format.

    Format:
    - Header: 'GLST' + version (4 bytes) + entry count (4 bytes)
    - Entries: sorted by name, each
      name length (4 bytes) + name + data length (4 bytes) + data
    - Checksum: SHA-1 of everything above
    """
    content = bytearray()

    content.extend(SIGNATURE)
    content.extend(struct.pack('>I', VERSION))
    content.extend(struct.pack('>I', len(entries)))

    for name in sorted(entries):
        encoded_name = name.encode()
        data = entries[name].data
        content.extend(struct.pack('>I', len(encoded_name)))
        content.extend(encoded_name)
        content.extend(struct.pack('>I', len(data)))
        content.extend(data)

    content.extend(hashlib.sha1(content).digest())
    return bytes(content)


def decode_entries(data: bytes) -> Dict[str, Blob]:
    """
    Decode a staging file produced by :func:`encode_entries`.

    Raises:
        CorruptStagingError: On a bad signature, checksum or truncated entry
    """
    if len(data) < 32:
        raise CorruptStagingError("Staging file is truncated")

    content = data[:-20]
    checksum = data[-20:]
    if hashlib.sha1(content).digest() != checksum:
        raise CorruptStagingError("Staging checksum mismatch")

    signature = content[0:4]
    if signature != SIGNATURE:
        raise CorruptStagingError(f"Invalid staging signature: {signature!r}")

    entry_count = struct.unpack('>I', content[8:12])[0]

    entries = {}
    offset = 12
    try:
        for _ in range(entry_count):
            name_len = struct.unpack('>I', content[offset:offset + 4])[0]
            offset += 4
            name = content[offset:offset + name_len].decode()
            offset += name_len

            data_len = struct.unpack('>I', content[offset:offset + 4])[0]
            offset += 4
            entries[name] = Blob(name, content[offset:offset + data_len])
            offset += data_len
    except struct.error:
        raise CorruptStagingError("Staging entry is truncated")

    return entries


class StagingArea:
    """
    Gitlet staging area.

    Holds the files staged for addition and the files staged for removal,
    each as a name -> Blob mapping. A name is never in both.
    """

    def __init__(self):
        """Initialize empty staging area."""
        self.additions: Dict[str, Blob] = {}
        self.removals: Dict[str, Blob] = {}

    @classmethod
    def read(cls, repo) -> 'StagingArea':
        """
        Load the staging area from disk.

        Missing staging files read as empty.

        Args:
            repo: Repository instance
        """
        staging = cls()
        if repo.staged_add_file.exists():
            staging.additions = decode_entries(repo.staged_add_file.read_bytes())
        if repo.staged_rm_file.exists():
            staging.removals = decode_entries(repo.staged_rm_file.read_bytes())
        return staging

    def write(self, repo) -> None:
        """Persist both mappings to disk."""
        atomic_write(repo.staged_add_file, encode_entries(self.additions))
        atomic_write(repo.staged_rm_file, encode_entries(self.removals))

    def add(self, repo, name: str) -> bool:
        """
        Stage a working-tree file for addition.

        Content identical to the head commit's version un-stages any
        pending addition instead.

        Args:
            repo: Repository instance
            name: Repository-relative file name

        Returns:
            bool: True if the file ended up staged for addition

        Raises:
            PreconditionError: If the working file is missing or cannot
                be tracked
        """
        if '\n' in name:
            raise PreconditionError(INVALID_FILE_NAME)
        if name.split('/', 1)[0] == GITLET_DIR:
            raise PreconditionError(FILE_MISSING)

        file_path = repo.work_tree / name
        if not file_path.is_file():
            raise PreconditionError(FILE_MISSING)

        blob = Blob.from_file(name, file_path)
        self.removals.pop(name, None)

        if repo.head_commit().blob_hash(name) == blob.hash:
            self.additions.pop(name, None)
            logger.debug("%s matches head commit, not staged", name)
            staged = False
        else:
            self.additions[name] = blob
            logger.debug("staged %s as %s", name, blob.hash[:7])
            staged = True

        self.write(repo)
        return staged

    def remove(self, repo, name: str) -> None:
        """
        Un-stage a file and, if the head commit tracks it, stage its removal.

        A tracked file is also deleted from the working tree.

        Args:
            repo: Repository instance
            name: Repository-relative file name

        Raises:
            StateConflictError: If the file is neither staged nor tracked
        """
        head = repo.head_commit()
        if name not in self.additions and not head.tracks(name):
            raise StateConflictError(NOTHING_TO_REMOVE)

        self.additions.pop(name, None)

        if head.tracks(name):
            self.removals[name] = repo.objects.get_blob(head.blob_hash(name))
            file_path = repo.work_tree / name
            if file_path.is_file():
                file_path.unlink()
            logger.debug("staged removal of %s", name)

        self.write(repo)

    def clear(self) -> None:
        """Drop every pending addition and removal."""
        self.additions.clear()
        self.removals.clear()

    def is_empty(self) -> bool:
        return not self.additions and not self.removals

    def __len__(self) -> int:
        """Number of staged changes."""
        return len(self.additions) + len(self.removals)

    def __repr__(self) -> str:
        """String representation."""
        return f"StagingArea(additions={len(self.additions)}, removals={len(self.removals)})"
