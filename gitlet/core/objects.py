"""Gitlet objects: file snapshots (blobs) and commits."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional
from .hash import hash_object

# Timestamp carried by the root commit of every repository.
INITIAL_TIMESTAMP = 'Wed Dec 31 16:00:00 1969 -0800'
INITIAL_MESSAGE = 'initial commit'
TIMESTAMP_FORMAT = '%a %b %d %H:%M:%S %Y %z'


class GitletObject(ABC):
    """Base class for all Gitlet objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """Payload bytes, without the type header."""

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """Populate fields from a payload produced by serialize()."""

    @property
    def type(self) -> str:
        """Store type name: blob or commit."""
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\0<content>

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            data = self.serialize()
            header = f"{self.type} {len(data)}\0".encode()
            self._hash = hash_object(header + data)
        return self._hash

    @property
    def hash(self) -> str:
        return self.compute_hash()


class Blob(GitletObject):
    """
    Snapshot of a single file.

    Unlike a plain content blob, the identity covers the file name as well
    as the bytes: the same content under two names gives two blobs.
    """

    def __init__(self, name: str = '', data: Optional[bytes] = None):
        """
        Initialize a blob.

        Args:
            name: Repository-relative file name
            data: File content as bytes
        """
        super().__init__()
        self.name = name
        self.data = data or b''

    def serialize(self) -> bytes:
        """
        Serialize blob to bytes.

        Format: <name>\0<content>

        Returns:
            bytes: Name and raw file content
        """
        return self.name.encode() + b'\0' + self.data

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize blob from bytes.

        Args:
            data: Serialized name and content
        """
        null_pos = data.index(b'\0')
        self.name = data[:null_pos].decode()
        self.data = data[null_pos + 1:]
        self._hash = None

    @classmethod
    def from_file(cls, name: str, filepath) -> 'Blob':
        """
        Create blob from a working-tree file.

        Args:
            name: Repository-relative name to record
            filepath: Path to read the content from

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(name, f.read())

    def __eq__(self, other) -> bool:
        return isinstance(other, Blob) and self.hash == other.hash

    def __hash__(self) -> int:
        return hash(self.hash)

    def __repr__(self) -> str:
        """String representation of blob."""
        size = len(self.data)
        return f"Blob(hash={self.hash[:7]}, name={self.name!r}, size={size})"


class Commit(GitletObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - The tracked files, as a file name -> blob hash table
    - Its parent commit (None for the root commit)
    - A second parent, set only on merge commits
    - Timestamp
    - Commit message
    """

    def __init__(self):
        """Initialize empty commit."""
        super().__init__()
        self.message: str = ''
        self.timestamp: str = ''
        self.parent: Optional[str] = None
        self.second_parent: Optional[str] = None
        self.files: Dict[str, str] = {}

    @property
    def parents(self) -> List[str]:
        """Parent hashes, first parent first."""
        return [p for p in (self.parent, self.second_parent) if p is not None]

    @property
    def is_merge(self) -> bool:
        return self.second_parent is not None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def tracks(self, name: str) -> bool:
        """Check whether the commit records a file with this name."""
        return name in self.files

    def blob_hash(self, name: str) -> Optional[str]:
        """Get the blob hash recorded for a file name, if tracked."""
        return self.files.get(name)

    def serialize(self) -> bytes:
        """
        Serialize commit to Gitlet format.

        Format:
        parent <parent-hash>         (absent on the root commit)
        merge-parent <parent-hash>   (merge commits only)
        date <timestamp>
        file <blob-hash> <name>      (zero or more, sorted by name)

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = []

        if self.parent is not None:
            lines.append(f'parent {self.parent}')
        if self.second_parent is not None:
            lines.append(f'merge-parent {self.second_parent}')

        lines.append(f'date {self.timestamp}')

        for name in sorted(self.files):
            lines.append(f'file {self.files[name]} {name}')

        lines.append('')
        lines.append(self.message)

        return '\n'.join(lines).encode()

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit from Gitlet format.

        Args:
            data: Serialized commit data
        """
        content = data.decode()
        lines = content.split('\n')

        self.parent = None
        self.second_parent = None
        self.files = {}

        message_start = len(lines)
        for i, line in enumerate(lines):
            if not line:
                message_start = i + 1
                break

            if line.startswith('parent '):
                self.parent = line[7:]

            elif line.startswith('merge-parent '):
                self.second_parent = line[13:]

            elif line.startswith('date '):
                self.timestamp = line[5:]

            elif line.startswith('file '):
                blob_hash, name = line[5:].split(' ', 1)
                self.files[name] = blob_hash

        self.message = '\n'.join(lines[message_start:])
        self._hash = None

    @classmethod
    def create(
        cls,
        message: str,
        parent: Optional[str],
        files: Dict[str, str],
        second_parent: Optional[str] = None,
        timestamp: Optional[str] = None
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            message: Commit message
            parent: Hash of the first parent (None only for the root)
            files: File name -> blob hash table
            second_parent: Hash of the merged-in commit, for merge commits
            timestamp: Formatted timestamp (defaults to now, local time)

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.message = message
        commit.parent = parent
        commit.second_parent = second_parent
        commit.files = dict(files)

        if timestamp is None:
            timestamp = datetime.now().astimezone().strftime(TIMESTAMP_FORMAT)
        commit.timestamp = timestamp

        return commit

    @classmethod
    def initial(cls) -> 'Commit':
        """The root commit every repository starts from."""
        return cls.create(INITIAL_MESSAGE, None, {}, timestamp=INITIAL_TIMESTAMP)

    def __repr__(self) -> str:
        """String representation."""
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
