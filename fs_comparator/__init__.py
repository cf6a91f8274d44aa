"""
Directory tree diff tool
"""

from .__version__ import (
    __author__,
    __author_email__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __version__,
)

from .diff_data import (
    DiffState,
    ComparisonResult,
    FsDiff,
)

from .tree_listing import (
    EntryKind,
    PathEntry,
    InvalidRootError,
    TreeLister,
)

from .file_comparison import (
    FileComparer,
    compare_all,
)

from .fs_diff import (
    FsDiffer,
    compute_listing_diff,
    skip_entry,
)

from .cli_output import (
    print_diff,
    ReportPrinter,
)
