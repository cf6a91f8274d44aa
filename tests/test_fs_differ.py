"""
End-to-end test cases for directory tree diffs.
"""
import os
import pathlib as pl
import tempfile
import unittest
from unittest import TestCase, mock

from fs_comparator.diff_data import DiffState
from fs_comparator.fs_diff import FsDiffer
from fs_comparator.tree_listing import InvalidRootError
from tree_fixtures import make_tree

SAMPLE_TREE = {
    'a.txt': 'hello',
    'docs': {'readme.md': '# docs', 'img': {'logo.png': b'\x89PNG'}},
    'src': {'main.py': 'print(1)\n', 'util.py': ''},
}


class TestFsDiffer(TestCase):
    """
    Tests the full comparison of two directory trees.
    """

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        base = pl.Path(self._tmp.name).resolve()
        self.first = base / 'first'
        self.second = base / 'second'
        self.first.mkdir()
        self.second.mkdir()
        self.differ = FsDiffer(workers=4)

    def tearDown(self):
        self._tmp.cleanup()

    def test_identical_trees(self):
        make_tree(self.first, SAMPLE_TREE)
        make_tree(self.second, SAMPLE_TREE)

        result = self.differ.compute_diff(self.first, self.second)

        self.assertEqual([], result.only_at_first)
        self.assertEqual([], result.only_at_second)
        self.assertEqual([], result.differing_files)
        self.assertEqual(['a.txt', 'docs/img/logo.png', 'docs/readme.md', 'src/main.py',
                          'src/util.py'], result.common_files)
        self.assertFalse(result.has_differences)

    def test_file_only_at_first(self):
        make_tree(self.first, {'a.txt': 'hello'})

        result = self.differ.compute_diff(self.first, self.second)

        self.assertEqual([self.first / 'a.txt'], result.only_at_first)
        self.assertEqual([], result.only_at_second)
        self.assertEqual([], result.differing_files)

    def test_differing_contents(self):
        make_tree(self.first, {'dir': {'x.txt': '1'}})
        make_tree(self.second, {'dir': {'x.txt': '2'}})

        result = self.differ.compute_diff(self.first, self.second)

        self.assertEqual(['dir/x.txt'], result.common_files)
        self.assertEqual(['dir/x.txt'], result.differing_files)
        self.assertEqual({DiffState.ONLY_FIRST: 0, DiffState.ONLY_SECOND: 0,
                          DiffState.COMMON: 1, DiffState.DIFFERENT: 1}, result.stats())

    def test_directory_against_file(self):
        make_tree(self.first, {'n': {'f': 'content'}})
        make_tree(self.second, {'n': 'content'})

        result = self.differ.compute_diff(self.first, self.second)

        self.assertEqual([self.first / 'n'], result.only_at_first)
        self.assertEqual([self.second / 'n'], result.only_at_second)
        self.assertEqual([], result.common_files)
        self.assertEqual([], result.differing_files)

    def test_large_identical_file(self):
        content = os.urandom(1024 * 1024) * 10
        make_tree(self.first, {'big.bin': content})
        make_tree(self.second, {'big.bin': content})

        result = self.differ.compute_diff(self.first, self.second)

        self.assertEqual(['big.bin'], result.common_files)
        self.assertEqual([], result.differing_files)

    def test_same_length_differs_at_end(self):
        make_tree(self.first, {'big.bin': b'\0' * 300000 + b'a'})
        make_tree(self.second, {'big.bin': b'\0' * 300000 + b'b'})

        self.assertEqual(['big.bin'],
                         self.differ.compute_diff(self.first, self.second).differing_files)

    def test_file_unreadable_after_listing(self):
        make_tree(self.first, {'f.txt': 'same', 'g.txt': 'same'})
        make_tree(self.second, {'f.txt': 'same', 'g.txt': 'same'})
        real_open = open

        def failing_open(file, *args, **kwargs):
            if os.fspath(file).endswith('f.txt'):
                raise PermissionError(13, 'Permission denied', file)
            return real_open(file, *args, **kwargs)

        with mock.patch('builtins.open', side_effect=failing_open):
            result = self.differ.compute_diff(self.first, self.second)

        self.assertEqual(['f.txt', 'g.txt'], result.common_files)
        self.assertEqual(['f.txt'], result.differing_files)

    def test_missing_directory_subsumes_children(self):
        make_tree(self.first, {'a': {'b': {'c': '1'}, 'd': '2'}, 'e': '3'})
        make_tree(self.second, {'e': '3'})

        result = self.differ.compute_diff(self.first, self.second)

        self.assertEqual([self.first / 'a'], result.only_at_first)

    def test_symmetry_and_idempotence(self):
        make_tree(self.first, {'a': {'x': '1', 'y': '2'}, 'b': '3', 'c': {}, 'n': {'m': ''},
                               'same': 's'})
        make_tree(self.second, {'a': {'x': '1', 'y': 'changed', 'z': ''}, 'c': 'file', 'n': '',
                                'same': 's', 'only': {'deep': {'er': ''}}})

        forward = self.differ.compute_diff(self.first, self.second)
        again = self.differ.compute_diff(self.first, self.second)
        backward = self.differ.compute_diff(self.second, self.first)

        self.assertEqual(forward, again)
        self.assertEqual(forward.only_at_first, backward.only_at_second)
        self.assertEqual(forward.only_at_second, backward.only_at_first)
        self.assertEqual(forward.differing_files, backward.differing_files)
        self.assertEqual(['a/y'], forward.differing_files)
        self.assertEqual([self.first / 'b', self.first / 'c', self.first / 'n'],
                         forward.only_at_first)
        self.assertEqual([self.second / 'a/z', self.second / 'c', self.second / 'n',
                          self.second / 'only'], forward.only_at_second)

    def test_relative_roots_are_canonicalized(self):
        make_tree(self.first, {'a': '1'})
        make_tree(self.second, {'a': '1'})
        relative = pl.Path(os.path.relpath(self.second))

        result = self.differ.compute_diff(self.first / '.' / '..' / 'first', relative)

        self.assertEqual(self.first, result.root_first)
        self.assertEqual(self.second, result.root_second)

    def test_invalid_roots(self):
        make_tree(self.first, {'file': 'x'})

        with self.assertRaises(InvalidRootError) as context:
            self.differ.compute_diff(self.first / 'missing', self.second)
        self.assertIn('does not exist', str(context.exception))

        with self.assertRaises(InvalidRootError) as context:
            self.differ.compute_diff(self.first, self.first / 'file')
        self.assertIn('is not a directory', str(context.exception))

        with mock.patch.object(pl.Path, 'exists',
                               side_effect=PermissionError(13, 'Permission denied')):
            with self.assertRaises(InvalidRootError) as context:
                self.differ.compute_diff(self.first, self.second)
        self.assertIn('is not accessible', str(context.exception))
        self.assertIsInstance(context.exception.__cause__, PermissionError)


if __name__ == '__main__':
    unittest.main()
