"""
Command-line interface to the fs-comparator module.
"""

import argparse
import logging
import pathlib as pl
import sys

from fs_comparator import FsDiffer, InvalidRootError, print_diff

DEFAULT_REPORT_FILE = 'fs_comparator_report'


def main():
    """
    Main method that handles the command line interface of fs-comparator
    :return: Process exit status.
    """
    parser = argparse.ArgumentParser("fs-comparator",
                                     description='''Diff tool for directory trees.''')
    parser.add_argument('dir1',
                        type=pl.Path,
                        metavar='DIR_1',
                        help='First directory.')
    parser.add_argument('dir2',
                        type=pl.Path,
                        metavar='DIR_2',
                        help='Second directory.')
    parser.add_argument('--report',
                        type=pl.Path,
                        default=pl.Path(DEFAULT_REPORT_FILE),
                        help='File the report is written to in addition to the standard output.'
                             f' Defaults to "{DEFAULT_REPORT_FILE}".')
    parser.add_argument('--no-report',
                        action='store_true',
                        help='Only print the report to the standard output.')
    parser.add_argument('--workers',
                        type=int,
                        default=None,
                        help='Number of threads comparing file contents. Defaults to the number'
                             ' of CPUs.')
    parser.add_argument('--buffer-size',
                        type=int,
                        default=128 * 1024,
                        help='Size of the read buffer used for file content comparison.')
    parser.add_argument('--quiet', '-q',
                        action='store_true',
                        help='Only print a summary line if the directories differ.')
    parser.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Log progress and skipped entries to the standard error.')
    args = parser.parse_args()

    if args.workers is not None and args.workers < 1:
        parser.error('--workers must be at least 1')
    if args.buffer_size < 1:
        parser.error('--buffer-size must be at least 1')

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    differ = FsDiffer(workers=args.workers, buffer_size=args.buffer_size)
    try:
        fs_diff = differ.compute_diff(args.dir1, args.dir2)
    except InvalidRootError as error:
        print(error, file=sys.stderr)
        return 1

    try:
        print_diff(fs_diff, quiet=args.quiet, report_file=None if args.no_report else args.report)
    except (OSError, UnicodeError) as error:
        print(f'Cannot write report: {error}', file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
