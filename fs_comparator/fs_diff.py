"""
Diffing implementation.
"""

from __future__ import annotations

import logging
import pathlib as pl
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from fs_comparator.diff_data import ComparisonResult, FsDiff
from fs_comparator.file_comparison import FileComparer, compare_all
from fs_comparator.tree_listing import InvalidRootError, PathEntry, TreeLister
from fs_comparator.utils import is_descendant

logger = logging.getLogger(__name__)


def skip_entry(listing: List[PathEntry], index: int) -> int:
    """
    Advances past the entry at `index`. For a directory, all of its descendants are skipped as
    well; they directly follow the directory in a sorted listing.

    :param listing: Sorted listing.
    :param index: Position of the entry to skip.
    :return: Position of the next entry that is not part of the skipped subtree.
    """
    entry = listing[index]
    index += 1
    if entry.is_dir:
        while index < len(listing) and is_descendant(listing[index].key, entry.key):
            index += 1
    return index


def compute_listing_diff(root_first: pl.Path, listing1: List[PathEntry],
                         root_second: pl.Path, listing2: List[PathEntry]) -> ComparisonResult:
    """
    Merges two sorted listings in a single pass. Paths only present in one listing are reported
    once for the topmost missing directory, never for its contents. Paths that are a file in one
    listing and a directory in the other are reported as missing on both sides.

    :param root_first: Root of the first listing, used to build absolute paths.
    :param listing1: First listing, sorted by path key.
    :param root_second: Root of the second listing.
    :param listing2: Second listing, sorted by path key.
    :return: The only-at-first, only-at-second and common file collections.
    """
    result = ComparisonResult()

    # Both listings are sorted by the same key, so we can traverse them in parallel, always
    # proceeding with the listing whose next entry has the smaller path.
    i, j = 0, 0
    while i < len(listing1) and j < len(listing2):
        left = listing1[i]
        right = listing2[j]
        if left.key < right.key:
            result.only_at_first.append(root_first / left.relpath)
            i = skip_entry(listing1, i)
        elif left.key > right.key:
            result.only_at_second.append(root_second / right.relpath)
            j = skip_entry(listing2, j)
        elif left.kind != right.kind:
            result.only_at_first.append(root_first / left.relpath)
            result.only_at_second.append(root_second / right.relpath)
            i = skip_entry(listing1, i)
            j = skip_entry(listing2, j)
        else:
            if not left.is_dir:
                result.common_files.append(left.relpath)
                if len(result.common_files) % 1000 == 0:
                    logger.debug('Merged %d common files', len(result.common_files))
            i += 1
            j += 1

    # When the first pass is completed, one of the listings might not have been traversed
    # fully. Everything left in it is missing from the other side.
    while i < len(listing1):
        result.only_at_first.append(root_first / listing1[i].relpath)
        i = skip_entry(listing1, i)
    while j < len(listing2):
        result.only_at_second.append(root_second / listing2[j].relpath)
        j = skip_entry(listing2, j)

    return result


class FsDiffer:
    """
    Compares two directory trees by path and by file contents.
    """

    def __init__(self, workers: Optional[int] = None, buffer_size=128 * 1024):
        """
        :param workers: Number of threads comparing file contents, defaults to the CPU count.
        :param buffer_size: Size of the read buffer used to compare file contents.
        """
        self.workers = workers
        self._comparer = FileComparer(buffer_size)
        self._lister = TreeLister()

    def canonical_root(self, path: pl.Path) -> pl.Path:
        """
        Resolves the given path to a canonical root directory.

        :param path: Input path.
        :raises InvalidRootError: If the path does not exist, is not a directory or cannot be
            accessed.
        :return: Absolute path with all links and relative parts resolved.
        """
        try:
            if not path.exists():
                raise InvalidRootError(path, 'does not exist')
            if not self._lister.check_root(path):
                raise InvalidRootError(path, 'is not a directory')
            return path.absolute().resolve(strict=True)
        except OSError as error:
            raise InvalidRootError(path, f'is not accessible: {error}') from error

    def compute_listings(self, root_first: pl.Path, root_second: pl.Path):
        """
        Lists both roots concurrently and waits for both listings.
        :return: Tuple of the two sorted listings.
        """
        with ThreadPoolExecutor(max_workers=2) as executor:
            future1 = executor.submit(self._lister.compute_listing, root_first)
            future2 = executor.submit(self._lister.compute_listing, root_second)
            return future1.result(), future2.result()

    def compute_diff(self, first: pl.Path, second: pl.Path) -> FsDiff:
        """
        Computes a full diff between the directory trees at the given paths.
        :param first: Path to the first directory.
        :param second: Path to the second directory.
        :raises InvalidRootError: If one of the paths is not an existing directory.
        :return: Diff between the trees.
        """
        root_first = self.canonical_root(first)
        root_second = self.canonical_root(second)

        listing1, listing2 = self.compute_listings(root_first, root_second)
        logger.info('Listed %d entries in %s and %d entries in %s',
                    len(listing1), root_first, len(listing2), root_second)

        merged = compute_listing_diff(root_first, listing1, root_second, listing2)
        logger.info('Comparing contents of %d common files', len(merged.common_files))

        differing = compare_all(merged.common_files, root_first, root_second,
                                comparer=self._comparer, workers=self.workers)

        return FsDiff(
            root_first=root_first,
            root_second=root_second,
            only_at_first=merged.only_at_first,
            only_at_second=merged.only_at_second,
            common_files=merged.common_files,
            differing_files=differing,
        )
