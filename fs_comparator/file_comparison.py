"""
Helper to compare file contents.
"""

from __future__ import annotations

import logging
import os
import pathlib as pl
import stat
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from fs_comparator.utils import path_key, path_parts

logger = logging.getLogger(__name__)

PROGRESS_INTERVAL = 1000


def is_regular_file(path: pl.Path) -> bool:
    """
    :return: True, if the path is a regular file and not a symbolic link.
    """
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError:
        return False


class FileComparer:
    """
    Helper class to compare the byte streams of two files.
    """

    def __init__(self, buffer_size=128 * 1024):
        """
        :param buffer_size: Buffer size used to read the input streams.
        """
        self.buffer_size = buffer_size

    def __repr__(self):
        return f'FileComparer({self.buffer_size})'

    def compare(self, path1: pl.Path, path2: pl.Path) -> bool:
        """
        Compares the contents of two files. Anything but two readable regular files is reported
        as a difference.

        :param path1: First file.
        :param path2: Second file.
        :return: True, if both files have identical contents.
        """
        if not (is_regular_file(path1) and is_regular_file(path2)):
            return False

        try:
            with open(path1, 'rb') as file1, open(path2, 'rb') as file2:
                return self.compare_streams(file1, file2)
        except OSError as error:
            logger.debug('Cannot compare %s and %s: %s', path1, path2, error)
            return False

    def compare_streams(self, input1, input2) -> bool:
        """
        Compares two binary io objects chunk by chunk, stopping at the first difference.
        :return: True, if both streams hold the same bytes.
        """
        while True:
            data1 = input1.read(self.buffer_size)
            data2 = input2.read(self.buffer_size)
            if data1 != data2:
                return False
            if not data1:
                return True


def compare_all(common_files: Sequence[str], root_first: pl.Path, root_second: pl.Path,
                comparer: Optional[FileComparer] = None,
                workers: Optional[int] = None) -> List[str]:
    """
    Compares all common files between the two roots in parallel.

    :param common_files: Relative paths present as file below both roots.
    :param root_first: First root directory.
    :param root_second: Second root directory.
    :param comparer: File comparer, a default one is used if None.
    :param workers: Number of worker threads, defaults to the number of CPUs.
    :return: Sorted relative paths of the files whose contents differ.
    """
    comparer = comparer or FileComparer()
    workers = workers or os.cpu_count() or 1

    differing = []
    lock = threading.Lock()
    compared = 0

    def compare_chunk(chunk: Sequence[str]) -> None:
        nonlocal compared
        for relpath in chunk:
            try:
                same = comparer.compare(root_first / relpath, root_second / relpath)
            except Exception:
                logger.warning('Comparison of %s failed, reporting it as different', relpath,
                               exc_info=True)
                same = False

            with lock:
                if not same:
                    differing.append(relpath)
                compared += 1
                if compared % PROGRESS_INTERVAL == 0:
                    logger.debug('Compared %d of %d common files', compared, len(common_files))

    # Contiguous chunks, several per worker.
    chunk_size = max(1, len(common_files) // (workers * 4))
    chunks = [common_files[i:i + chunk_size] for i in range(0, len(common_files), chunk_size)]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        # Drain the results so errors escaping a worker are raised here.
        for _ in executor.map(compare_chunk, chunks):
            pass

    differing.sort(key=lambda x: path_key(path_parts(x)))
    return differing
