"""
Data classes representing a directory tree diff.
"""

from __future__ import annotations

import pathlib as pl
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List


class DiffState(Enum):
    """
    Enumeration of the result collections of a tree diff.
    """

    ONLY_FIRST = auto()
    ONLY_SECOND = auto()
    COMMON = auto()
    DIFFERENT = auto()


@dataclass
class ComparisonResult:
    """
    Result of merging two tree listings. The only-lists hold absolute paths below the respective
    root, the common files are relative paths present as a file in both trees.
    """
    only_at_first: List[pl.Path] = field(default_factory=list)
    only_at_second: List[pl.Path] = field(default_factory=list)
    common_files: List[str] = field(default_factory=list)


@dataclass
class FsDiff:
    """
    This class contains the full results of a directory tree diff.
    """
    root_first: pl.Path
    root_second: pl.Path
    only_at_first: List[pl.Path]
    only_at_second: List[pl.Path]
    common_files: List[str]
    differing_files: List[str]

    @property
    def has_differences(self) -> bool:
        return bool(self.only_at_first or self.only_at_second or self.differing_files)

    def stats(self) -> Dict[DiffState, int]:
        """
        Computes the size of each result collection.
        :return: Dict mapping `DiffState` to the corresponding path counts.
        """
        return {
            DiffState.ONLY_FIRST: len(self.only_at_first),
            DiffState.ONLY_SECOND: len(self.only_at_second),
            DiffState.COMMON: len(self.common_files),
            DiffState.DIFFERENT: len(self.differing_files),
        }
