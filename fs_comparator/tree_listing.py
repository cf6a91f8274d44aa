"""
Listing of directory trees as sorted sequences of relative paths.
"""
from __future__ import annotations

import logging
import os
import pathlib as pl
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Tuple, Union

from fs_comparator.utils import PathKey, path_key, path_parts, root_prefix_length

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1000


class EntryKind(Enum):
    """
    Kinds of file system entries that take part in a comparison.
    """

    FILE = auto()
    DIRECTORY = auto()


@dataclass(frozen=True)
class PathEntry:
    """
    A file or directory below a root, identified by its relative path. Entries are compared by
    their path only, the kind is not part of the key.
    """
    kind: EntryKind = field(compare=False)
    relpath: str
    key: PathKey = field(repr=False)

    def __init__(self, kind: EntryKind, relpath: Union[str, List[str]]) -> None:
        """
        :param kind: Kind of the entry.
        :param relpath: Path string or list of path segments identifying this entry.
        """
        parts = path_parts(relpath) if isinstance(relpath, str) else list(relpath)
        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, 'relpath', '/'.join(parts))
        object.__setattr__(self, 'key', path_key(parts))

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY


class InvalidRootError(ValueError):
    """
    Error raised if a comparison root does not exist or is not a directory.
    """

    def __init__(self, path: pl.Path, reason: str):
        super().__init__(f"path '{path}' {reason}")
        self.path = path
        self.reason = reason


class TreeLister:
    """
    Lists all regular files and directories below a root. Symbolic links are never listed, not
    even if they point to a file or directory.
    """

    def check_root(self, path: pl.Path) -> bool:
        """
        Checks if the given path can be listed by this lister.

        :param path: Input path
        :return: True, if the path is a directory.
        """
        return path.is_dir()

    def compute_listing(self, root: pl.Path) -> List[PathEntry]:
        """
        Lists the files and folders below the given root. Entries that cannot be accessed are
        left out together with everything below them, the listing itself never fails for such
        entries.

        :param root: Canonical root directory.
        :return: Entries sorted by their path key.
        """
        root_str = os.fspath(root)
        prefix_len = root_prefix_length(root_str)

        listing = []
        for kind, abs_path in self._walk(root_str):
            listing.append(PathEntry(kind, abs_path[prefix_len:].replace(os.sep, '/')))
            if len(listing) % PROGRESS_INTERVAL == 0:
                logger.debug('Listed %d entries below %s', len(listing), root_str)

        listing.sort(key=lambda x: x.key)
        logger.debug('Listed %d entries below %s in total', len(listing), root_str)
        return listing

    @staticmethod
    def _walk(root: str) -> Iterator[Tuple[EntryKind, str]]:
        """
        Yields `(kind, absolute path)` for everything below `root` in no particular order.
        """
        pending = [root]
        while pending:
            directory = pending.pop()
            try:
                with os.scandir(directory) as entries:
                    children = list(entries)
            except OSError as error:
                logger.debug('Skipping unreadable directory %s: %s', directory, error)
                continue

            for entry in children:
                try:
                    if entry.is_symlink():
                        continue
                    if entry.is_dir(follow_symlinks=False):
                        kind = EntryKind.DIRECTORY
                    elif entry.is_file(follow_symlinks=False):
                        kind = EntryKind.FILE
                    else:
                        continue
                except OSError as error:
                    logger.debug('Skipping inaccessible entry %s: %s', entry.path, error)
                    continue

                yield kind, entry.path
                if kind == EntryKind.DIRECTORY:
                    pending.append(entry.path)
