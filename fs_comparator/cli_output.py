"""
Helper to write an FsDiff report to the command line and to report files.
"""

import sys
from typing import Iterable, Optional, TextIO

from fs_comparator.diff_data import DiffState, FsDiff


class ReportPrinter:
    """
    Utility to print tree diffs to one or more output streams.
    """

    def __init__(self, quiet=False, outputs: Optional[Iterable[TextIO]] = None):
        """
        :param quiet: True to use a short one line summary, printed only if the trees differ.
        :param outputs: Output streams to write to, every line goes to all of them.
        """
        self.quiet = quiet
        self.outputs = list(outputs) if outputs is not None else [sys.stdout]

    def line(self, *args):
        """
        Prints a line to all configured output streams.
        :param args: line contents
        """
        text = ' '.join(str(arg) for arg in args) + '\n'
        for output in self.outputs:
            try:
                output.write(text)
            except UnicodeEncodeError:
                # File names may hold bytes the stream encoding cannot represent.
                encoding = getattr(output, 'encoding', None) or 'utf8'
                output.write(text.encode(encoding, 'backslashreplace').decode(encoding))

    def print_diff(self, fs_diff: FsDiff):
        """
        Prints the given diff in the configured output format.
        :param fs_diff: Tree diff to print.
        """
        counts = fs_diff.stats()

        if self.quiet:
            if fs_diff.has_differences:
                self.line(f'Different:'
                          f' c={counts[DiffState.COMMON]}'
                          f' d={counts[DiffState.DIFFERENT]}'
                          f' of={counts[DiffState.ONLY_FIRST]}'
                          f' os={counts[DiffState.ONLY_SECOND]}')
            return

        self.line(f'Has only at first path: {counts[DiffState.ONLY_FIRST]}')
        for path in fs_diff.only_at_first:
            self.line(path)
        self.line(f'Has only at second path: {counts[DiffState.ONLY_SECOND]}')
        for path in fs_diff.only_at_second:
            self.line(path)
        self.line(f'Common paths: {counts[DiffState.COMMON]}')
        self.line(f'Total common diff: {counts[DiffState.DIFFERENT]}')
        for relpath in fs_diff.differing_files:
            self.line(relpath)


def print_diff(fs_diff: FsDiff, *, quiet=False, report_file=None) -> None:
    """
    Prints the diff in a human-readable format to the standard output and, if given, to a report
    file.

    :param fs_diff: diff object
    :param quiet: True to only print a summary line if the trees differ.
    :param report_file: Path of the report file, None to skip writing it.
    :raises OSError: If the report file cannot be written.
    """
    if report_file is None:
        ReportPrinter(quiet=quiet).print_diff(fs_diff)
        return

    with open(report_file, 'w', encoding='utf8', errors='surrogateescape') as report:
        ReportPrinter(quiet=quiet, outputs=[sys.stdout, report]).print_diff(fs_diff)
