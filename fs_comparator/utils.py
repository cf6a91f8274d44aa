"""
Utility functions.
"""

import os
from typing import List, Tuple

PathKey = Tuple[bytes, ...]


def path_parts(relpath: str) -> List[str]:
    """
    Splits a canonical relative path into its parts.
    :param relpath: Relative path using '/' as separator.
    :return: parts of the path
    """
    return [part for part in relpath.split('/') if part]


def path_key(parts: List[str]) -> PathKey:
    """
    Computes the byte-wise sort key of a relative path. Comparing the keys orders a directory
    directly before all of its descendants.

    :param parts: Path segments.
    :return: Tuple of the encoded path segments.
    """
    return tuple(os.fsencode(part) for part in parts)


def is_descendant(key: PathKey, parent_key: PathKey) -> bool:
    """
    :return: True, if `key` lies strictly below `parent_key`.
    """
    return len(key) > len(parent_key) and key[:len(parent_key)] == parent_key


def root_prefix_length(root: str) -> int:
    """
    Number of characters to strip from an absolute path below `root` to make it relative. The
    separator following the root is stripped as well, unless the root is the file system root
    which already ends with a separator.
    """
    if root.endswith(os.sep) or (os.altsep and root.endswith(os.altsep)):
        return len(root)
    return len(root) + 1
